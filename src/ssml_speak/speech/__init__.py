"""Speech synthesis: SSML preparation and backends."""
