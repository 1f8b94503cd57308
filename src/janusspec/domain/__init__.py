"""Pure value objects and functions used by the engine."""
