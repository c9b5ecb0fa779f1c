"""Server-rendered public site and back office, talking to the JSON API over HTTP."""
