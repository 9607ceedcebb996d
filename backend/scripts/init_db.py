"""Initialize the database - creates all tables, the super-admin account and default site content."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sitecms.config import settings
from sitecms.database import SessionLocal, engine, Base
import sitecms.models  # noqa: F401 - registers all models

from sitecms.models.site_content import SiteContent
from sitecms.services.credential_store import CredentialStore
from sitecms.utils.permissions import Role

DEFAULT_CONTENT = [
    {"key": "hero-title", "title": "Hero Section Title",
     "content": "Discover The Compassion Course", "section": "hero", "order": 1},
    {"key": "hero-subtitle", "title": "Hero Section Subtitle",
     "content": "Changing lives in over 120 Countries", "section": "hero", "order": 2},
    {"key": "hero-description", "title": "Hero Section Description",
     "content": "The Compassion Course empowers you to live in alignment with your values, be heard and "
                "understood and create meaningful dialogues by understanding human needs.",
     "section": "hero", "order": 3},
    {"key": "about-title", "title": "About Section Title",
     "content": "About the Compassion Course", "section": "about", "order": 1},
    {"key": "about-description", "title": "About Section Description",
     "content": "Changing Lives for 14 Years, with more than 30,000 Participants, in over 120 Countries, "
                "in 20 Languages.",
     "section": "about", "order": 2},
    {"key": "stats-participants", "title": "Participants Statistics",
     "content": "30,000+", "section": "statistics", "order": 1},
    {"key": "stats-countries", "title": "Countries Statistics",
     "content": "120+", "section": "statistics", "order": 2},
    {"key": "stats-languages", "title": "Languages Statistics",
     "content": "20", "section": "statistics", "order": 3},
    {"key": "cta-title", "title": "Call To Action Title",
     "content": "Join the next course", "section": "cta", "order": 1},
    {"key": "footer-copyright", "title": "Footer Copyright",
     "content": "© The Compassion Course", "section": "footer", "order": 1},
]


def init_db():
    print("Creating all database tables...")
    Base.metadata.create_all(bind=engine)

    store = CredentialStore(rounds=settings.BCRYPT_ROUNDS)
    db = SessionLocal()
    try:
        admin = store.find_by_email(db, settings.ADMIN_EMAIL)
        if admin is None:
            admin = store.create(
                db,
                name="Admin User",
                email=settings.ADMIN_EMAIL,
                password=settings.ADMIN_PASSWORD,
                role=Role.SUPER_ADMIN,
            )
            print(f"Super-admin created: {admin.email} (change the password after first login)")
        else:
            print("Super-admin already exists. Skipping.")

        created = 0
        for row in DEFAULT_CONTENT:
            if db.query(SiteContent).filter(SiteContent.key == row["key"]).first():
                continue
            db.add(SiteContent(**row, version=1, last_modified_by=admin.user_id))
            created += 1
        db.commit()
        print(f"Default content created: {created} item(s).")
    finally:
        db.close()
    print("Database initialized successfully.")


if __name__ == "__main__":
    init_db()
