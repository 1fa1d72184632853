"""HTTP routes of the quiz module."""
