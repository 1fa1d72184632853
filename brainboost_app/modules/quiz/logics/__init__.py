"""Pure quiz logic: evaluation, migration, authoring, test runs and stats."""
