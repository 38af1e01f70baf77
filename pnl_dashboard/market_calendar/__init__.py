"""Exchange trading calendar."""
