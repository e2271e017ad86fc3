"""
产品注册表单元测试

测试产品名称、资源排除、重复 bundle 和依赖标题等规则。
"""

import pytest

from zippack.registry import (
    Product,
    RULES,
    canonical_name,
    dependency_header,
    duplicate_bundles_to_remove,
    exclude_resources,
    known_products,
    lookup,
    rules_for,
)


class TestProduct:
    """Product 枚举测试"""

    def test_raw_names_are_unique(self):
        """测试产品原始名称唯一"""
        values = [product.value for product in Product]
        assert len(values) == len(set(values))

    def test_lookup_known(self):
        """测试查找已知产品"""
        assert lookup("Storage") is Product.STORAGE
        assert lookup("Google-Mobile-Ads-SDK") is Product.AD_MOB

    def test_lookup_unknown(self):
        """测试查找未知产品"""
        assert lookup("Unknown") is None
        assert lookup("storage") is None

    def test_every_product_has_rules(self):
        """测试每个产品都有规则"""
        assert set(RULES) == set(known_products())

    def test_rules_table_is_read_only(self):
        """测试规则表只读"""
        with pytest.raises(TypeError):
            RULES[Product.STORAGE] = RULES[Product.AUTH]

    def test_unknown_product_uses_default_rules(self):
        """测试未知产品使用默认规则"""
        rules = rules_for("Unknown")
        assert rules.exclude_resources is False
        assert rules.duplicate_bundles == ()


class TestCanonicalName:
    """canonical_name 测试"""

    def test_prefixed(self):
        """测试已知产品加 Firebase 前缀"""
        assert canonical_name("Storage") == "FirebaseStorage"
        assert canonical_name("MLVisionFaceModel") == "FirebaseMLVisionFaceModel"

    def test_google_products_unchanged(self):
        """测试 Google 前缀的产品保持原样"""
        assert canonical_name("Google-Mobile-Ads-SDK") == "Google-Mobile-Ads-SDK"
        assert canonical_name("GoogleSignIn") == "GoogleSignIn"

    def test_unknown_unchanged(self):
        """测试未知名称保持原样"""
        assert canonical_name("Unknown") == "Unknown"

    def test_umbrella_product(self):
        """测试总括产品"""
        assert canonical_name("") == "Firebase"


class TestExcludeResources:
    """exclude_resources 测试"""

    @pytest.mark.parametrize("raw", ["MLVision", "MLVisionBarcodeModel", "MLVisionLabelModel"])
    def test_excluded(self, raw):
        assert exclude_resources(raw) is True

    @pytest.mark.parametrize("raw", ["Storage", "MLVisionFaceModel", "MLVisionTextModel", "Unknown"])
    def test_not_excluded(self, raw):
        assert exclude_resources(raw) is False


class TestDuplicateBundles:
    """duplicate_bundles_to_remove 测试"""

    @pytest.mark.parametrize(
        "raw",
        ["MLVisionBarcodeModel", "MLVisionFaceModel", "MLVisionLabelModel", "MLVisionTextModel"],
    )
    def test_model_products(self, raw):
        """测试 ML 模型产品"""
        assert duplicate_bundles_to_remove(raw) == ["GTMSessionFetcher.framework", "Protobuf.framework"]

    def test_other_products(self):
        """测试其他产品返回空列表"""
        assert duplicate_bundles_to_remove("Auth") == []
        assert duplicate_bundles_to_remove("MLVision") == []
        assert duplicate_bundles_to_remove("Unknown") == []

    def test_returns_fresh_list(self):
        """测试修改返回值不影响注册表"""
        bundles = duplicate_bundles_to_remove("MLVisionFaceModel")
        bundles.clear()
        assert len(duplicate_bundles_to_remove("MLVisionFaceModel")) == 2


class TestDependencyHeader:
    """dependency_header 测试"""

    def test_analytics(self):
        assert dependency_header("Analytics") == "## Analytics\n"

    def test_google_sign_in(self):
        assert dependency_header("GoogleSignIn") == "## GoogleSignIn\n"

    def test_depends_on_analytics(self):
        assert dependency_header("Storage") == "## Storage (~> Analytics)\n"

    def test_unknown_depends_on_analytics(self):
        assert dependency_header("Unknown") == "## Unknown (~> Analytics)\n"
