"""
Benchmark harness: timing (measure), target registry (targets), YAML runner (runner).
"""
