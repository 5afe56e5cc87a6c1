"""External validators for module directories."""

from tfx.core.validate.base import NoopValidator, Validator
from tfx.core.validate.terraform import TerraformValidator

__all__ = ["NoopValidator", "TerraformValidator", "Validator"]
