"""Service layer for HealthVault."""
