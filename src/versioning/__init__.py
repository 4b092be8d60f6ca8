"""Version comparison, range matching and requirement parsing."""
