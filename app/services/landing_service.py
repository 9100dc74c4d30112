"""
Landing page content

Static marketing content shown to anonymous visitors.
"""

from __future__ import annotations

from functools import lru_cache

from app.models.schemas import LandingPage, LandingStep, LinkGroup


@lru_cache(maxsize=1)
def get_landing_page() -> LandingPage:
    return LandingPage(
        brand="StudyMate",
        headline="Find Your Perfect Study Partner",
        tagline=(
            "Connect with compatible study partners who match your skills, goals, and schedule. "
            "Our AI-powered matching system helps you find the ideal collaboration partners."
        ),
        how_it_works=[
            LandingStep(
                title="Create Your Profile",
                description="Tell us about your skills, learning goals, and study preferences",
            ),
            LandingStep(
                title="Get Matched",
                description="Our AI analyzes compatibility and suggests the best study partners for you",
            ),
            LandingStep(
                title="Start Studying",
                description="Connect with your matches and begin collaborative learning sessions",
            ),
        ],
        benefits=[
            LandingStep(
                title="Smart Scheduling",
                description="Match with partners who share your availability",
            ),
            LandingStep(
                title="AI-Powered Matching",
                description="Advanced algorithms find your perfect study companions",
            ),
            LandingStep(
                title="Real-time Notifications",
                description="Get instant alerts when you have new matches",
            ),
        ],
        call_to_action=LandingStep(
            title="Ready to get started?",
            description="Join thousands of students who've found their perfect study partners",
        ),
        footer=[
            LinkGroup(
                title="Features",
                links=["Smart Matching", "Profile Creation", "Real-time Chat", "Schedule Coordination"],
            ),
            LinkGroup(
                title="Support",
                links=["Help Center", "Contact Us", "Privacy Policy", "Terms of Service"],
            ),
            LinkGroup(
                title="Community",
                links=["About Us", "Student Resources", "Academic Support", "Campus Life"],
            ),
        ],
        copyright="© 2024 StudyMate. All rights reserved.",
        sign_in_path="/v1/auth/{session_id}/sign-in",
    )
