"""Core data models, configuration, errors and logging for bazelify."""
