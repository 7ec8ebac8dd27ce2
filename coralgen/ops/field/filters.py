"""Post-rasterization field filters."""

import logging
from scipy import ndimage

from ...core.field import ScalarField

logger = logging.getLogger(__name__)


def blur_field(field: ScalarField, passes: int = 1) -> ScalarField:
    """Apply `passes` 3x3x3 box-filter passes in place (edges use nearest values)."""
    for _ in range(max(int(passes), 0)):
        field.values[...] = ndimage.uniform_filter(field.values, size=3, mode="nearest")
    if passes > 0:
        logger.debug(f"Blurred field with {passes} box-filter pass(es)")
    return field


__all__ = ["blur_field"]
