"""
shopcurator: API de scraping de fiches produit + checkout Stripe avec frais de curation.
"""
