"""Link preview service — SSRF-safe page fetch and preview metadata extraction."""
