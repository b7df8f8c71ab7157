"""Decision and safety stages of the transcode pipeline."""
