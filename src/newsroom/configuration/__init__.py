"""Configuration helpers for django-configurations based projects."""
