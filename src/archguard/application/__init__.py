"""archguard application layer: analysis, rules, services, reporters."""
