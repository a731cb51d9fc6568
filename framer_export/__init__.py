"""Static export of sitemap-driven Framer sites."""
