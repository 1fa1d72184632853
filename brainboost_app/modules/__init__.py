"""Feature modules, each packaged as a blueprint plus its logic and services."""
