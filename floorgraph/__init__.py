"""floorgraph - capture a navigation graph on top of a floorplan image."""
__version__ = "0.1.0"
