"""Regress Kernel — finite-domain verification of circular-definition regresses."""

__version__ = "0.1.0"
