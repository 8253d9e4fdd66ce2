"""GitHub-facing collaborators: inputs, outputs, check runs and comments."""
