"""archguard infrastructure layer: cache, adapters, configuration."""
