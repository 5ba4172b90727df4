"""
app/domain/catalog.py

Static option catalog shown by the wizard: KPIs, ad-platform integrations
and external factor categories.
"""

from __future__ import annotations

from typing import Any

PRIMARY_KPIS: tuple[dict[str, str], ...] = (
    {"id": "purchase", "name": "Purchase", "description": "Completed transactions that generate revenue"},
    {"id": "app_install", "name": "App Install", "description": "New application installations"},
    {"id": "sign_up", "name": "Sign Up", "description": "New user registrations and account creations"},
)

SECONDARY_KPIS: tuple[dict[str, str], ...] = (
    {"id": "add_to_cart", "name": "Add to Cart", "description": "Items added to shopping cart"},
    {"id": "view_product", "name": "View Product", "description": "Product page views"},
    {"id": "search", "name": "Search", "description": "Search queries performed"},
    {"id": "tutorial_complete", "name": "Tutorial Complete", "description": "Users who completed onboarding tutorials"},
    {"id": "level_complete", "name": "Level Complete", "description": "Users completing game levels"},
    {"id": "reward_unlocked", "name": "Reward Unlocked", "description": "Achievement or reward milestones reached"},
    {"id": "rating", "name": "Rating", "description": "User ratings or reviews submitted"},
)

MAX_SECONDARY_KPIS = 3

INTEGRATIONS: tuple[dict[str, str], ...] = (
    {"id": "google-ads", "name": "Google Ads", "description": "Connect your Google Ads account to import campaign performance data."},
    {"id": "facebook-ads", "name": "Facebook Ads", "description": "Import your Meta Ads data including Facebook and Instagram campaigns."},
    {"id": "tiktok-ads", "name": "TikTok Ads", "description": "Connect and import campaign data from your TikTok Ads account."},
    {"id": "linkedin-ads", "name": "LinkedIn Ads", "description": "Import your LinkedIn advertising campaign performance data."},
    {"id": "twitter-ads", "name": "Twitter Ads", "description": "Connect and import your Twitter advertising campaign data."},
    {"id": "snapchat-ads", "name": "Snapchat Ads", "description": "Import your Snapchat advertising campaign performance data."},
)

EXTERNAL_FACTOR_CATEGORIES: tuple[dict[str, Any], ...] = (
    {
        "id": "seasonality",
        "name": "Seasonality & Weather",
        "factors": [
            {"id": "seasons", "name": "Seasons", "description": "Account for seasonal patterns in consumer behavior"},
            {"id": "weather", "name": "Weather Events", "description": "Include major weather events that affected your business"},
        ],
    },
    {
        "id": "events",
        "name": "Events & Holidays",
        "factors": [
            {"id": "holidays", "name": "Holidays", "description": "Include key holidays that affect your business"},
            {"id": "major-events", "name": "Major Events", "description": "Include significant global or local events"},
        ],
    },
    {
        "id": "economic",
        "name": "Economic Factors",
        "factors": [
            {"id": "economic-indicators", "name": "Economic Indicators", "description": "Include economic factors that may impact consumer behavior"},
        ],
    },
    {
        "id": "competitive",
        "name": "Competitive Activity",
        "factors": [
            {"id": "competitor-campaigns", "name": "Competitor Campaigns", "description": "Track major competitor marketing initiatives"},
        ],
    },
)


def integration_name(integration_type: str) -> str:
    """
    Return the catalog display name for an integration type, or the type itself.
    """

    for option in INTEGRATIONS:
        if option["id"] == integration_type:
            return option["name"]
    return integration_type
