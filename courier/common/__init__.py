"""Small helpers shared across Courier subsystems."""
