"""One tab per calculation mode, plus the compressor database and history tab."""
