"""Feature modules that sit beside the trigger engine."""
