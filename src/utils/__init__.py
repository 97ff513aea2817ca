"""
LevelBot - Utils Package
========================

Helper functions shared across cogs and services.

DESIGN:
    Utils are stateless helpers. They should not have side effects
    or depend on bot state.

Available Utilities:
    avatar: Avatar download for rank cards
    duration: Elapsed time formatting
    validators: Hex colour validation
    error_handler: Categorized error logging
    interaction: Safe interaction responses
"""
