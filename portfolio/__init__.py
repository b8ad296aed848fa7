"""Interaction layer of the portfolio site: project feed, notifications and contact form."""
