"""Message template preview and import reconciliation."""
