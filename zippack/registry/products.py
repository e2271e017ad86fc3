"""
产品注册表

所有参与打包发布的产品（封闭集合）及其打包规则。纯函数，无 I/O。
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Optional, Tuple

# 品牌前缀，以及不需要加前缀的自有命名前缀
BRAND_PREFIX = "Firebase"
VENDOR_PREFIX = "Google"

# 依赖标注的目标产品
ANALYTICS = "Analytics"

_SHARED_DUPLICATES: Tuple[str, ...] = ("GTMSessionFetcher.framework", "Protobuf.framework")


class Product(str, Enum):
    """所有参与打包发布的产品，值为产品原始名称"""
    AB_TESTING = "ABTesting"
    AD_MOB = "Google-Mobile-Ads-SDK"
    ANALYTICS = "Analytics"
    AUTH = "Auth"
    CORE = "Core"
    DATABASE = "Database"
    DYNAMIC_LINKS = "DynamicLinks"
    FIREBASE = ""  # 总括产品
    FIRESTORE = "Firestore"
    FUNCTIONS = "Functions"
    GOOGLE_SIGN_IN = "GoogleSignIn"
    IN_APP_MESSAGING = "InAppMessaging"
    IN_APP_MESSAGING_DISPLAY = "InAppMessagingDisplay"
    MESSAGING = "Messaging"
    ML_MODEL_INTERPRETER = "MLModelInterpreter"
    ML_NATURAL_LANGUAGE = "MLNaturalLanguage"
    ML_NL_LANGUAGE_ID = "MLNLLanguageID"
    ML_NL_SMART_REPLY = "MLNLSmartReply"
    ML_NL_TRANSLATE = "MLNLTranslate"
    ML_VISION = "MLVision"
    ML_VISION_AUTO_ML = "MLVisionAutoML"
    ML_VISION_OBJECT_DETECTION = "MLVisionObjectDetection"
    ML_VISION_BARCODE_MODEL = "MLVisionBarcodeModel"
    ML_VISION_FACE_MODEL = "MLVisionFaceModel"
    ML_VISION_LABEL_MODEL = "MLVisionLabelModel"
    ML_VISION_TEXT_MODEL = "MLVisionTextModel"
    PERFORMANCE = "Performance"
    REMOTE_CONFIG = "RemoteConfig"
    STORAGE = "Storage"


@dataclass(frozen=True)
class ProductRules:
    """单个产品的打包规则"""
    exclude_resources: bool = False  # 是否完全不打包资源文件
    duplicate_bundles: Tuple[str, ...] = ()  # 可传递重复、可安全删除的 bundle
    depends_on_analytics: bool = True  # README 标题是否标注依赖 Analytics


_DEFAULT_RULES = ProductRules()

_RULE_OVERRIDES = {
    Product.ANALYTICS: ProductRules(depends_on_analytics=False),
    Product.GOOGLE_SIGN_IN: ProductRules(depends_on_analytics=False),
    Product.ML_VISION: ProductRules(exclude_resources=True),
    Product.ML_VISION_BARCODE_MODEL: ProductRules(
        exclude_resources=True, duplicate_bundles=_SHARED_DUPLICATES
    ),
    Product.ML_VISION_FACE_MODEL: ProductRules(duplicate_bundles=_SHARED_DUPLICATES),
    Product.ML_VISION_LABEL_MODEL: ProductRules(
        exclude_resources=True, duplicate_bundles=_SHARED_DUPLICATES
    ),
    Product.ML_VISION_TEXT_MODEL: ProductRules(duplicate_bundles=_SHARED_DUPLICATES),
}

# 每个产品一条规则，注册后只读
RULES: Mapping[Product, ProductRules] = MappingProxyType(
    {product: _RULE_OVERRIDES.get(product, _DEFAULT_RULES) for product in Product}
)


def lookup(raw: str) -> Optional[Product]:
    """按原始名称查找产品，未知名称返回 None"""
    try:
        return Product(raw)
    except ValueError:
        return None


def known_products() -> List[Product]:
    """按声明顺序返回所有已知产品"""
    return list(Product)


def rules_for(raw: str) -> ProductRules:
    """获取产品规则；未知产品使用默认规则"""
    product = lookup(raw)
    if product is None:
        return _DEFAULT_RULES
    return RULES[product]


def canonical_name(raw: str) -> str:
    """产品在包仓库中的名称

    已知产品且不带 Google 前缀时加上 Firebase 前缀，其余原样返回。
    """
    if not raw.startswith(VENDOR_PREFIX) and lookup(raw) is not None:
        return f"{BRAND_PREFIX}{raw}"
    return raw


def exclude_resources(raw: str) -> bool:
    """是否需要完全排除资源文件"""
    product = lookup(raw)
    return product is not None and RULES[product].exclude_resources


def duplicate_bundles_to_remove(raw: str) -> List[str]:
    """打包时需要删除的重复 bundle 名称列表

    ML 模型类产品会传递引入一些与其他产品重复的 bundle。
    """
    product = lookup(raw)
    if product is None:
        return []
    return list(RULES[product].duplicate_bundles)


def dependency_header(raw: str) -> str:
    """README 中描述依赖关系的一行标题"""
    header = f"## {raw}"
    # 未知产品同样视为依赖 Analytics
    if rules_for(raw).depends_on_analytics:
        header += f" (~> {ANALYTICS})"
    return header + "\n"
