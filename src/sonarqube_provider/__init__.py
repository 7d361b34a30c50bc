"""Terraform-style provider resources for SonarQube."""

__version__ = "0.1.0"
