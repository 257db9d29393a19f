"""Support resources, daily tips and the contact form."""
import logging
import random

from fastapi import APIRouter
from pydantic import Field

from ..models.base import CamelModel

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Resources"])

CRISIS_RESOURCES = [
    {"name": "Mental Health Crisis Line", "contact": "14416"},
    {"name": "National Suicide Prevention Lifeline", "contact": "988"},
    {"name": "Crisis Text Line", "contact": "Text HOME to 741741"},
    {"name": "SAMHSA National Helpline", "contact": "1-800-662-4357"},
]
EMERGENCY_NUMBER = "100"

DAILY_TIPS = [
    "Take 5 deep breaths when feeling overwhelmed",
    "Practice gratitude by listing 3 things you're thankful for",
    "Take a 10-minute walk to boost your mood",
    "Connect with a friend or family member today",
    "Try a short meditation or mindfulness exercise",
    "Write down your thoughts and feelings",
    "Listen to music that makes you feel good",
    "Do something creative, even for just 5 minutes",
    "Drink water and eat nutritious foods",
    "Get some sunlight and fresh air",
]

PROFESSIONAL_HELP = [
    "Psychology Today: Find therapists in your area",
    "SAMHSA Treatment Locator: samhsa.gov",
    "Your insurance provider's website",
    "Ask your primary care doctor for referrals",
    "Employee Assistance Programs (EAP) if available",
]

MINDFULNESS_STEPS = [
    "Find a comfortable position and close your eyes.",
    "Take a deep breath in for 4 counts...",
    "Hold for 4 counts...",
    "Exhale for 4 counts...",
    "Repeat this cycle and focus on your breathing.",
]


class ContactMessage(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    message: str = Field(min_length=1)


@router.get("/resources/crisis")
async def get_crisis_resources():
    return {
        "resources": CRISIS_RESOURCES,
        "emergency": EMERGENCY_NUMBER,
        "message": "Remember: You are not alone, and help is available 24/7.",
    }


@router.get("/resources/tip")
async def get_daily_tip():
    return {"tip": random.choice(DAILY_TIPS)}


@router.get("/resources/professionals")
async def get_professional_help():
    return {
        "resources": PROFESSIONAL_HELP,
        "message": "Remember: Seeking professional help is a sign of strength.",
    }


@router.get("/resources/mindfulness")
async def get_mindfulness_session():
    return {"steps": MINDFULNESS_STEPS}


@router.post("/contact")
async def submit_contact(body: ContactMessage):
    logger.info("Contact message received from %s", body.email)
    return {"status": "received", "message": "Thank you for your message! We'll get back to you soon."}
