"""Outer surfaces (CLI) built on the configuration and chat layers."""
