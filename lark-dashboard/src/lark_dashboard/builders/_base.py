"""Shared builder plumbing: partial state, placement setters, build()."""

from ..types import (
    BLOCK_CONFIG_TYPES, BlockPermission, DashboardBlock, DataSource, Position, Size,
)
from ..validation import validate_block_config


def _as_tuple(values) -> tuple:
    """Freeze a list argument; a single string counts as one item, not its characters."""
    if isinstance(values, str):
        return (values,)
    return tuple(values)


class _BlockMixin:
    """Setters every block builder shares.

    Subclasses set BLOCK_TYPE and keep config fields in self._fields;
    _collect() may add fields gathered in side lists before the config is frozen.
    Setters never validate. build() does, then freezes a DashboardBlock.
    """

    BLOCK_TYPE = None

    def __init__(self):
        self._fields = {}
        self._placement = {}

    def _set(self, **fields):
        self._fields.update(fields)
        return self

    def _data_source(self, app_token, table_id, view_id=None):
        return self._set(data_source=DataSource(app_token, table_id, view_id))

    # ── Placement ──────────────────────────────────────────────

    def position(self, x: int, y: int):
        self._placement["position"] = Position(x, y)
        return self

    def size(self, width: int, height: int):
        self._placement["size"] = Size(width, height)
        return self

    def z_index(self, z_index: int):
        self._placement["z_index"] = z_index
        return self

    def visible(self, visible: bool = True):
        self._placement["visible"] = visible
        return self

    def locked(self, locked: bool = True):
        self._placement["locked"] = locked
        return self

    def permission(self, permission: BlockPermission):
        self._placement["permission"] = permission
        return self

    # ── Build ──────────────────────────────────────────────────

    def _collect(self) -> dict:
        return dict(self._fields)

    def build_config(self):
        """Freeze the current state into the config dataclass, without validating."""
        return BLOCK_CONFIG_TYPES[self.BLOCK_TYPE](**self._collect())

    def build(self) -> DashboardBlock:
        """Validate and return an immutable block. Raises ValidationError."""
        config = self.build_config()
        validate_block_config(self.BLOCK_TYPE, config)
        return DashboardBlock(block_type=self.BLOCK_TYPE, config=config, **self._placement)
