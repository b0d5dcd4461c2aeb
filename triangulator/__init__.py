"""Grid overlay for triangulating a hidden target from known structures."""
