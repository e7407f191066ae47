"""Type oracles deciding which annotations are pipeline element types."""
