"""Pre-written AI insight cards returned by the ``generate-insights`` function."""
from typing import Dict, List

INSIGHTS: Dict[str, List[dict]] = {
    "engagement": [
        {"emoji": "📈", "title": "Strong DAU Growth",
         "content": "DAU increased 23% this month, driven by the March SAT prep surge. Peak engagement occurs Tuesday-Thursday."},
        {"emoji": "📅", "title": "Optimal Posting Times",
         "content": "Tuesday-Thursday shows highest engagement. Consider scheduling content drops and feature releases for these days."},
        {"emoji": "⚠️", "title": "Weekend Engagement Gap",
         "content": "Weekend engagement dropped 15% compared to weekdays. Consider gamification elements to boost weekend usage."},
        {"emoji": "🎯", "title": "SAT Proximity Effect",
         "content": "Users engage 80% more within 2 weeks of SAT dates. Capitalize with targeted push notifications during these windows."},
    ],
    "retention": [
        {"emoji": "🚀", "title": "D7 Retention Improvement",
         "content": "D7 retention improved from 25% to 28% after the Study Planner redesign in March. Continue iterating on planning features."},
        {"emoji": "📉", "title": "Onboarding Drop-off Risk",
         "content": "Users who don't complete onboarding have 3x higher churn risk. Focus on reducing friction in the first session."},
        {"emoji": "🌟", "title": "March Cohort Excellence",
         "content": "March cohort shows best retention (52% Week 1) - correlates with SAT proximity and improved AI Tutor launch."},
        {"emoji": "💡", "title": "Feature Correlation",
         "content": "Users who use Study Planner within first 3 days have 2.3x higher D30 retention. Consider making it part of onboarding."},
    ],
    "features": [
        {"emoji": "🚀", "title": "AI Tutor Growth",
         "content": "AI Tutor adoption grew 127% (15% → 34%) after UX improvements in February. Now the fastest-growing feature."},
        {"emoji": "💡", "title": "Study Planner Impact",
         "content": "Users who use Study Planner have 2.3x higher retention. Consider promoting it more prominently in onboarding."},
        {"emoji": "🔻", "title": "Community Forum Decline",
         "content": "Community Forum usage declining 3% month-over-month. Consider deprecating or pivoting to Discord integration."},
        {"emoji": "📊", "title": "Practice Tests Dominance",
         "content": "Practice Tests remain the core feature at 78% adoption. Ensure performance and add more SAT-aligned content."},
    ],
}


def generate_insights(mode: str = "engagement") -> List[dict]:
    return [dict(card) for card in INSIGHTS.get(mode, INSIGHTS["engagement"])]
