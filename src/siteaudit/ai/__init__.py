"""AI integrations for siteaudit."""
