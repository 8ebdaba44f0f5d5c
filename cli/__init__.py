"""siteqa command-line interface."""
