"""archguard presentation layer: fluent DSL and pytest plugin."""
