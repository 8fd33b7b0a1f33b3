"""Services: git metadata, editor session, PR body composer, record store."""
