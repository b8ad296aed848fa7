import logging
import time
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Form
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from .core.config import Config
from .core.dom import Element
from .core.http import JsonHttpClient
from .core.middleware import global_exception_handler, log_requests
from .services.animation import AnimationObserver
from .services.contact import ContactForm, ContactSubmission
from .services.notifications import NotificationCenter, Scheduler
from .services.project_feed import ProjectFeed, ProjectRecord, render_card

logger = logging.getLogger(__name__)

# Shipped with the page; stays on screen whenever the feed cannot load
STATIC_PROJECTS = (
    ProjectRecord(
        title="Line Following Robot",
        description="Arduino robot that tracks a taped course with IR sensors.",
        tags=("Arduino", "C++"),
    ),
    ProjectRecord(
        title="Smart Farm Monitor",
        description="Soil moisture and temperature dashboard for small farms.",
        tags=("IoT", "Sensors"),
    ),
    ProjectRecord(
        title="Portfolio Website",
        description="This site, backed by a small JSON API.",
        tags=("Web", "JavaScript"),
    ),
)

PAGE_STYLES = """
.animate-in { opacity: 1 !important; transform: translateY(0) !important; }
@keyframes slideIn { from { transform: translateX(100%); opacity: 0; } to { transform: translateX(0); opacity: 1; } }
@keyframes slideOut { from { transform: translateX(0); opacity: 1; } to { transform: translateX(100%); opacity: 0; } }
"""


def build_page() -> Element:
    """Return the page body with its static content."""
    skills = Element(
        "section",
        attrs={"id": "skills"},
        children=[
            Element(
                "div",
                classes=["skill-card"],
                children=[Element("h3", text=name), Element("div", classes=["skill-progress"])],
            )
            for name in ("Python", "Embedded C", "JavaScript")
        ],
    )
    about = Element(
        "section",
        attrs={"id": "about"},
        children=[Element("div", classes=["about-content"], text="Engineer building robots, sensors and the web.")],
    )
    projects = Element(
        "section",
        attrs={"id": "projects"},
        children=[
            Element(
                "div",
                classes=["projects-grid"],
                children=[render_card(record).element for record in STATIC_PROJECTS],
            )
        ],
    )
    contact = Element(
        "section",
        attrs={"id": "contact"},
        children=[Element("div", classes=["contact-content"], text="Get in touch.")],
    )
    return Element("body", children=[skills, about, projects, contact])


def render_document(body: Element) -> str:
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>Portfolio</title><style>{PAGE_STYLES}</style></head>"
        f"{body.to_html()}</html>"
    )


def create_app(http_client=None, scheduler: Optional[Scheduler] = None) -> FastAPI:
    """Build the host app. ``http_client`` and ``scheduler`` are injectable for tests."""
    client = http_client or JsonHttpClient()

    app = FastAPI(title="Portfolio Interaction Layer")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    @app.exception_handler(Exception)
    async def _global_exception_handler(request, exc):
        return await global_exception_handler(request, exc)

    @app.get("/", response_class=HTMLResponse)
    async def index():
        """Render the page, enhancing the project grid with the featured feed."""
        body = build_page()
        observer = AnimationObserver()
        observer.observe_static(body)
        feed = ProjectFeed(body.find("projects-grid"), client, observer)
        await feed.load()
        return HTMLResponse(render_document(body))

    @app.post("/contact")
    async def contact(
        name: str = Form(""),
        email: str = Form(""),
        message: str = Form(""),
    ):
        """Run one contact submission and report what the visitor would see."""
        body = build_page()
        notifications = NotificationCenter(body, scheduler=scheduler)
        form = ContactForm(name=name, email=email, message=message)
        await ContactSubmission(form, client, notifications).submit()

        shown = notifications.current
        return {
            "notification": {"message": shown.message, "kind": shown.kind} if shown else None,
            "button": {"label": form.button.label, "disabled": form.button.disabled},
            "form": form.payload(),
        }

    @app.get("/health")
    async def health_check():
        health_start_time = time.time()
        try:
            Config.validate()
            return {
                "status": "healthy",
                "service": "portfolio-interactions",
                "environment": Config.ENVIRONMENT,
                "api_base_url": Config.API_BASE_URL,
                "timestamp": datetime.now().isoformat(),
                "response_time_ms": round((time.time() - health_start_time) * 1000, 2),
            }
        except ValueError as e:
            logger.error(f"Health check failed: {str(e)}")
            return {
                "status": "unhealthy",
                "service": "portfolio-interactions",
                "environment": Config.ENVIRONMENT,
                "timestamp": datetime.now().isoformat(),
                "error": str(e),
            }

    return app


app = create_app()
