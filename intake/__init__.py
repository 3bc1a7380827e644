"""HTTP intake for job applications."""
