"""Business logic services.

Services contain all search/ranking logic and are called by routes.
Filtering, ranking and pagination are pure; store access goes through an
explicitly passed BusinessStore.
"""
