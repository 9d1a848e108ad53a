"""File assembly, persistence and comparison of generated Bazel files."""
