"""Shared test fixtures and configuration."""
import sys
import os

# Ensure the assistant package root is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set environment variables BEFORE any application module is imported.
# Dummy values only, no real LLM requests are made in tests.
os.environ.setdefault("LLM_PROVIDER", "gemini")
os.environ.setdefault("LLM_MODEL", "test-model")
os.environ.setdefault("GEMINI_API_KEYS", '["test-key-1", "test-key-2"]')
os.environ.setdefault("TASK_DUE_IN_DAYS", "7")
os.environ.setdefault("CURRENCY_SYMBOL", "$")
