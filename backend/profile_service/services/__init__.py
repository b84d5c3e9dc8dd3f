"""Services Layer — domain operations that sequence store IO around core rules."""
