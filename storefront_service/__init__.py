"""MyKart storefront service."""
