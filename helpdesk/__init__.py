"""Helpdesk API: support ticket label administration."""
