"""InstallConfig asset: materializes install-config.yaml.

The install config is either generated from the user input assets or loaded
from a previously written install-config.yaml. Both paths end the same way:

    [upgrade (load only)] -> defaults -> validate -> serialize

so a loaded file is held to exactly the rules a generated one is, and the
in-memory record and the file bytes always agree. Nothing is stored on the
asset until every stage has succeeded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from clusterforge_core import schemas
from clusterforge_core.asset.base import Asset, File, Parents, WritableAsset
from clusterforge_core.errors import (
    DefaultingError,
    InstallConfigValidationError,
    SerializationError,
    UpgradeError,
)
from clusterforge_core.installconfig.conversion import convert_install_config
from clusterforge_core.installconfig.defaults import set_install_config_defaults
from clusterforge_core.installconfig.inputs import (
    BaseDomain,
    ClusterName,
    PlatformSelection,
    PullSecret,
    SSHPublicKey,
)
from clusterforge_core.installconfig.validation import validate_install_config
from clusterforge_core.serialization import dump_yaml, load_yaml

if TYPE_CHECKING:
    from clusterforge_core.asset.fetcher import FileFetcher

logger = structlog.get_logger(__name__)

INSTALL_CONFIG_FILENAME = "install-config.yaml"


class InstallConfig(WritableAsset):
    """Generates the install-config.yaml file.

    Upgrade, defaulting and validation are pluggable: subclasses may replace
    ``converter``, ``defaulter`` or ``validator``. Defaults are always applied
    before validation.

    Attributes:
        config: The materialized record, or None before materialization.
        file: The serialized install-config.yaml, or None before materialization.

    Example:
        >>> store = AssetStore(Path("cluster"))
        >>> install_config = store.fetch(InstallConfig())
        >>> install_config.config.networking.network_type
        'OpenShiftSDN'
    """

    converter = staticmethod(convert_install_config)
    defaulter = staticmethod(set_install_config_defaults)
    validator = staticmethod(validate_install_config)

    def __init__(self) -> None:
        self.config: schemas.InstallConfig | None = None
        self.file: File | None = None

    def name(self) -> str:
        return "Install Config"

    def dependencies(self) -> list[Asset]:
        return [
            SSHPublicKey(),
            BaseDomain(),
            ClusterName(),
            PullSecret(),
            PlatformSelection(),
        ]

    def generate(self, parents: Parents) -> None:
        """Assemble a fresh install config from the resolved input assets."""
        ssh_key = parents.get(SSHPublicKey)
        base_domain = parents.get(BaseDomain)
        cluster_name = parents.get(ClusterName)
        pull_secret = parents.get(PullSecret)
        platform = parents.get(PlatformSelection)

        config = schemas.InstallConfig(
            api_version=schemas.INSTALL_CONFIG_VERSION,
            metadata=schemas.ObjectMeta(name=cluster_name.cluster_name),
            ssh_key=ssh_key.public_key or None,
            base_domain=base_domain.base_domain,
            pull_secret=pull_secret.pull_secret,
            platform=platform.platform,
        )
        self._finish(config, invalid_message="invalid install config")

    def files(self) -> list[File]:
        if self.file is not None:
            return [self.file]
        return []

    def load(self, fetcher: FileFetcher) -> bool:
        """Load install-config.yaml from the asset directory.

        Returns:
            False if the file does not exist, True once it has been loaded,
            upgraded, defaulted, validated and re-serialized.

        Raises:
            SerializationError: If the file is not a valid install config document.
            UpgradeError: If the document cannot be upconverted.
            DefaultingError: If defaults cannot be applied.
            InstallConfigValidationError: If any validation rule fails.
        """
        try:
            file = fetcher.fetch_by_name(INSTALL_CONFIG_FILENAME)
        except FileNotFoundError:
            return False

        config = load_yaml(
            file.data,
            schemas.InstallConfig,
            file_path=INSTALL_CONFIG_FILENAME,
            subject="install config",
        )

        try:
            config = self.converter(config)
        except Exception as e:
            raise UpgradeError(
                f"failed to upconvert install config: {e}",
                api_version=config.api_version,
            ) from e

        self._finish(config, invalid_message=f"invalid {INSTALL_CONFIG_FILENAME!r} file")
        logger.debug("install_config_loaded", cluster=config.metadata.name)
        return True

    def _finish(self, config: schemas.InstallConfig, *, invalid_message: str) -> None:
        """Default, validate and serialize a record, then store it."""
        try:
            config = self.defaulter(config)
        except Exception as e:
            raise DefaultingError(f"failed to set defaults for install config: {e}") from e

        violations = self.validator(config)
        if violations:
            raise InstallConfigValidationError(invalid_message, violations=violations)

        try:
            data = dump_yaml(config)
        except SerializationError as e:
            raise SerializationError(f"failed to marshal install config: {e}") from e

        self.config = config
        self.file = File(filename=INSTALL_CONFIG_FILENAME, data=data)
