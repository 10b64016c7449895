"""Services: Home Assistant client, entity mapping, facade and backend lifecycle."""
