"""Subprocess tests that run ``python -m yxcli`` end to end."""
