"""Signed request pipeline."""
