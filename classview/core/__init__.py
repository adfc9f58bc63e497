# Subpackages are imported directly, e.g. `from classview.core.resolver import ...`,
# so that loading descriptors does not pull in tree-sitter or httpx.
