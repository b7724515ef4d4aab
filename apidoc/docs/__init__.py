"""YAML operation descriptions shipped with the package."""
