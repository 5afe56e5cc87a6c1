"""tfx: concurrent Terraform module validation."""

__version__ = "0.3.0"
