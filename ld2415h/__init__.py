"""Protocol handling, device state and settings entities for the LD2415H speed radar."""

__version__ = "0.1.0"
__all__ = ["component", "entities", "numbers", "protocol", "selects", "sensor"]