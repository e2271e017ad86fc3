"""发布步骤"""

from .release_step import ReleaseStep
from .metadata_step import MetadataSynthesisStep
from .notices_step import NoticesStep
from .rules_step import RuleApplicationStep
from .fingerprint_step import FingerprintStep
from .archive_step import ArchiveStep, artifact_name

__all__ = [
    "ReleaseStep",
    "MetadataSynthesisStep",
    "NoticesStep",
    "RuleApplicationStep",
    "FingerprintStep",
    "ArchiveStep",
    "artifact_name",
]
