# docusafe/api/settings.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..config import settings
from ..database import get_db
from ..schemas.settings import Preferences, PreferencesUpdate, Intro, IntroPoint, About, Link
from ..services.preferences import get_preferences
from ..utils.logging import api_logger

router = APIRouter(prefix="/api/settings", tags=["settings"])

# Onboarding copy. Document locking is advertised here but not enforced anywhere.
INTRO = Intro(
    title=f"What's New in {settings.APP_NAME}",
    points=[
        IntroPoint(title="Scan Documents", image="scanner",
                   description="Scan any document with ease."),
        IntroPoint(title="Save Documents", image="tray.full.fill",
                   description="Persist scanned documents on your device."),
        IntroPoint(title="Lock Documents", image="faceid",
                   description="Protect your documents so that only you can unlock them."),
    ]
)


@router.get("", response_model=Preferences)
async def read_preferences(db: Session = Depends(get_db)):
    return get_preferences(db)


@router.put("", response_model=Preferences)
async def update_preferences(update: PreferencesUpdate, db: Session = Depends(get_db)):
    api_logger.info("Updating preferences", extra={
        "update_fields": update.model_dump(exclude_unset=True)
    })

    preferences = get_preferences(db)
    for field, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(preferences, field, value)

    db.commit()
    db.refresh(preferences)
    return preferences


@router.get("/intro", response_model=Intro)
async def read_intro():
    return INTRO


@router.post("/intro/dismiss", response_model=Preferences)
async def dismiss_intro(db: Session = Depends(get_db)):
    preferences = get_preferences(db)
    preferences.show_intro = False
    db.commit()
    db.refresh(preferences)
    return preferences


@router.get("/about", response_model=About)
async def read_about():
    return About(
        name=settings.APP_NAME,
        version=settings.APP_VERSION,
        build_number=settings.BUILD_NUMBER,
        support_email=settings.SUPPORT_EMAIL,
        legal=[
            Link(label="Privacy Policy", url=settings.PRIVACY_POLICY_URL),
            Link(label="Terms of Service", url=settings.TERMS_OF_SERVICE_URL),
        ],
        social=[Link(label=label, url=url) for label, url in settings.SOCIAL_LINKS.items()],
        contact=[Link(label="Email Support", url=f"mailto:{settings.SUPPORT_EMAIL}")]
    )
