"""Route handlers: one class per kind of page.

Each handler turns a RouteContext into a content tree, or into a Redirect
when the route is not available in the current session state.
"""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Union

from ..models.user import UserRecord
from ..services.chart import render_chart
from ..services.clock import Clock, now_local
from ..services.metrics import build_dashboard, chart_series, mood_emoji, mood_label
from .content import ContentNode, el

if TYPE_CHECKING:
    from ..services.session_state import SessionState
    from .navigator import RenderTarget

SITE_NAME = "MindBridge"

AGE_BRACKETS = ["13-17", "18-24", "25-34", "35-44", "45-54", "55-64", "65+"]
ACTIVITY_TAGS = ["exercise", "social", "work", "sleep", "meditation", "hobbies", "outdoors", "family"]


@dataclass
class Redirect:
    target: str


@dataclass
class RouteContext:
    """What a handler may consult while rendering."""

    session: "SessionState"
    clock: Clock = now_local
    chart_width: int = 600
    chart_height: int = 300
    extras: dict = field(default_factory=dict)


RenderResult = Union[ContentNode, Redirect]


class RouteHandler:
    """Base route: a name, a document title and post-render effects."""

    name: str = ""
    heading: str = ""
    effects: tuple[str, ...] = ()

    @property
    def title(self) -> str:
        return f"{SITE_NAME} - {self.heading}"

    def render(self, context: RouteContext) -> RenderResult:
        raise NotImplementedError

    def after_render(self, context: RouteContext, target: "RenderTarget") -> None:
        """Route-specific wiring once the content is in place."""
        target.effects.extend(self.effects)


def _section(heading: str, *body: Optional[ContentNode], main_class: str = "main-container") -> ContentNode:
    return el(
        "main",
        el("section", el("h1", heading, class_="design_text"), el("div", *body, class_="content-wrapper"), class_="content-section"),
        class_=main_class,
    )


def _card(heading: str, text: str, *extra: ContentNode, class_: str = "feature-card") -> ContentNode:
    return el("div", el("h3", heading), el("p", text), *extra, class_=class_)


class HomePage(RouteHandler):
    name = "home"
    heading = "Home"
    effects = ("animate-texts",)

    def render(self, context: RouteContext) -> RenderResult:
        return el(
            "div",
            el(
                "main",
                el(
                    "section",
                    el("div", el("span", class_="motto-line"), class_="motto design_text"),
                    el("div", el("a", "GET STARTED ➜", href="#get-started", class_="nav-link login_button"), class_="mobile-get-started"),
                    class_="hero-section",
                ),
                class_="main-container",
            ),
            el(
                "footer",
                el("p", "You don't have to struggle in silence! We are here just for you.", class_="support-text"),
                el("h2", "Grief", class_="design_text grief-title"),
                el(
                    "p",
                    "Each day we learn of the griefs and tribulations which affect our constituents or ourselves.",
                    class_="grief-description",
                ),
                class_="bottom-section regular_text",
            ),
        )


class InfoPage(RouteHandler):
    """Static page made of an intro paragraph and a grid of cards."""

    def __init__(self, name: str, heading: str, intro: str, cards: list[tuple[str, str]], grid: str = "feature-grid", card_link: Optional[str] = None):
        self.name = name
        self.heading = heading
        self.intro = intro
        self.cards = cards
        self.grid = grid
        self.card_link = card_link

    def render(self, context: RouteContext) -> RenderResult:
        extra = (el("a", "Apply Now", href=self.card_link, class_="regular_text apply-btn"),) if self.card_link else ()
        return _section(
            self.heading,
            el("p", self.intro, class_="regular_text"),
            el("div", *(_card(h, t, *extra) for h, t in self.cards), class_=self.grid),
        )


class ContactPage(RouteHandler):
    name = "contact"
    heading = "Contact Us"
    effects = ("contact-form",)

    def render(self, context: RouteContext) -> RenderResult:
        return _section(
            self.heading,
            el(
                "div",
                el(
                    "div",
                    el("h3", "Get in Touch"),
                    el("p", "We're here to help and would love to hear from you.", class_="regular_text"),
                    el("p", "Email: support@mindbridge.com"),
                    el("p", "Phone: (555) 123-4567"),
                    el("p", "Hours: Monday - Friday, 9AM - 6PM"),
                    class_="contact-info",
                ),
                el(
                    "form",
                    _field("Name", "name", "text", required=True),
                    _field("Email", "email", "email", required=True),
                    el("label", "Message", for_="message"),
                    el("textarea", id="message", name="message", rows="5", required=True),
                    el("button", "Send Message", type="submit", class_="submit-btn"),
                    id="contactForm",
                    action="/api/contact",
                    method="post",
                ),
                class_="contact-grid",
            ),
        )


def _field(label: str, name: str, input_type: str, element_id: Optional[str] = None, **attrs) -> ContentNode:
    element_id = element_id or name
    return el(
        "div",
        el("label", label, for_=element_id),
        el("input", type=input_type, id=element_id, name=name, **attrs),
        class_="form-group",
    )


class GetStartedPage(RouteHandler):
    """Login and sign-up forms, or a notice when a session is already active."""

    name = "get-started"
    heading = "Get Started"

    def render(self, context: RouteContext) -> RenderResult:
        if context.session.is_authenticated():
            return _section(
                "Already Logged In",
                el("p", "You are already logged in! Would you like to go to your dashboard?", class_="regular_text"),
                el("a", "Go to Dashboard", href="#dashboard", class_="regular_text nav-link login_button"),
                el("button", "Logout", id="logoutButton", class_="logout-btn"),
            )

        login = el(
            "div",
            el(
                "form",
                _field("Email", "email", "email", element_id="loginEmail", required=True),
                _field("Password", "password", "password", element_id="loginPassword", required=True),
                el("label", el("input", type="checkbox", name="rememberMe"), "Remember me"),
                el("button", "Login", type="submit", class_="auth-btn"),
                id="userLoginForm",
            ),
            el("p", "Don't have an account? ", el("a", "Sign up here", href="#", id="switchToRegister")),
            id="loginForm",
            class_="auth-form active",
        )
        register = el(
            "div",
            el(
                "form",
                _field("Full Name", "fullName", "text", required=True),
                _field("Email", "email", "email", element_id="registerEmail", required=True),
                _field("Password", "password", "password", element_id="registerPassword", required=True, minlength="6"),
                _field("Confirm Password", "confirmPassword", "password", required=True),
                el(
                    "select",
                    el("option", "Select your age range", value=""),
                    *(el("option", bracket, value=bracket) for bracket in AGE_BRACKETS),
                    name="age",
                    id="age",
                    required=True,
                ),
                el("label", el("input", type="checkbox", name="agreeTerms", required=True), "I agree to the Terms of Service and Privacy Policy"),
                el("label", el("input", type="checkbox", name="newsletter"), "Send me mental health tips and updates"),
                el("button", "Create Account", type="submit", class_="auth-btn"),
                id="userRegisterForm",
            ),
            el("p", "Already have an account? ", el("a", "Sign in here", href="#", id="switchToLogin")),
            id="registerForm",
            class_="auth-form",
        )
        return _section(
            self.heading,
            el(
                "p",
                "Join MindBridge to access personalized mental health resources, track your progress, and connect with support.",
                class_="regular_text",
            ),
            el(
                "div",
                el("button", "Login", id="showLogin", class_="auth-toggle-btn active"),
                el("button", "Sign Up", id="showRegister", class_="auth-toggle-btn"),
                class_="auth-toggle",
            ),
            login,
            register,
            main_class="main-container auth-main-container",
        )

    def after_render(self, context: RouteContext, target: "RenderTarget") -> None:
        if target.content is not None and target.content.find_id("userLoginForm") is not None:
            target.effects.append("auth-forms")


def _format_average(value: Optional[float]) -> str:
    return f"{value:.1f}" if value is not None else "—"


def _stat(label: str, value: str, element_id: str) -> ContentNode:
    return el("div", el("span", value, class_="stat-value", id=element_id), el("span", label, class_="stat-label"), class_="stat-card")


class DashboardPage(RouteHandler):
    """Personal dashboard; only reachable with an active session."""

    name = "dashboard"
    heading = "Dashboard"
    effects = ("mood-chart",)

    def _user(self, context: RouteContext) -> Optional[UserRecord]:
        if not context.session.is_authenticated():
            return None
        return context.session.current_user()

    def render(self, context: RouteContext) -> RenderResult:
        user = self._user(context)
        if user is None:
            return Redirect("get-started")

        summary = build_dashboard(user, context.clock())
        today = summary.todays_mood
        today_text = f"{mood_emoji(today.mood)} {mood_label(today.mood)}" if today else "Not logged yet"

        activity = [
            el("div", el("span", f"{item.emoji} {item.summary}", class_="activity-content"),
               el("span", item.date.strftime("%m/%d/%Y"), class_="activity-date"), class_="activity-item")
            for item in summary.recent_activity
        ] or [el("div", el("span", "No recent activity", class_="activity-content"), class_="activity-item")]

        return el(
            "main",
            el("h1", summary.greeting, id="userGreeting", class_="design_text"),
            el(
                "section",
                _stat("Today's Mood", today_text, "todaysMood"),
                _stat("Weekly Average", _format_average(summary.weekly_average), "weeklyAverage"),
                _stat("Monthly Average", _format_average(summary.monthly_average), "monthlyAverage"),
                _stat("Day Streak", str(summary.streak), "trackingStreak"),
                _stat("Goals Completed", f"{summary.goals_completed}/{summary.goals_total}", "goalsCompleted"),
                class_="stats-grid",
            ),
            el(
                "section",
                el("button", "😊 Update Mood" if today else "📊 Log Mood", id="logMoodButton", class_="action-btn"),
                el("button", "📝 Write Journal", id="journalButton", class_="action-btn"),
                el("button", "🎯 Goals", id="goalsButton", class_="action-btn"),
                class_="quick-actions",
            ),
            el(
                "section",
                el("h2", "Mood Over the Last 30 Days"),
                el("canvas", id="moodChart", width=str(context.chart_width), height=str(context.chart_height)),
                class_="chart-section",
            ),
            el("section", el("h2", "Recent Activity"), el("div", *activity, id="recentEntries"), class_="recent-activity"),
            el(
                "div",
                el("span", "Activities: "),
                *(el("button", tag, class_="tag-btn", data_activity=tag) for tag in ACTIVITY_TAGS),
                class_="activity-tags",
            ),
            class_="main-container dashboard-container",
        )

    def after_render(self, context: RouteContext, target: "RenderTarget") -> None:
        user = self._user(context)
        if user is not None:
            series = chart_series(user, context.clock())
            target.chart = render_chart(series, context.chart_width, context.chart_height)
        super().after_render(context, target)


def error_content() -> ContentNode:
    return _section(
        "Oops! Something went wrong",
        el("p", "We're sorry, but there was an error loading this page.", class_="regular_text"),
        el("a", "Go Home", href="#home", class_="regular_text nav-link login_button"),
    )


def default_routes() -> dict[str, RouteHandler]:
    """The site's route table, keyed by fragment name."""
    handlers: list[RouteHandler] = [
        HomePage(),
        InfoPage(
            "about",
            "About Us",
            "MindBridge is dedicated to supporting mental health and well-being in our community. "
            "We believe that everyone deserves access to mental health resources and support.",
            [
                ("Our Mission", "To bridge the gap between mental health struggles and accessible support."),
                ("Our Vision", "A world where mental health is prioritized and supported without stigma."),
                ("Our Values", "Compassion, understanding, accessibility, and community support."),
            ],
        ),
        InfoPage(
            "work",
            "Work With Us",
            "Join our mission to support mental health in the community. We're always looking for "
            "passionate individuals who want to make a difference.",
            [
                ("Volunteer Counselor", "Provide peer support and guidance to community members."),
                ("Event Coordinator", "Help organize mental health awareness events and workshops."),
                ("Content Creator", "Create educational content about mental health topics."),
            ],
            grid="opportunities-grid",
            card_link="#contact",
        ),
        InfoPage(
            "events",
            "Events",
            "Join us for workshops, support groups, and community events focused on mental health and wellness.",
            [
                ("Mental Health First Aid Workshop", "Learn essential skills to help someone experiencing a mental health crisis."),
                ("Mindfulness Meditation Session", "Join our guided meditation session for stress relief and mental clarity."),
                ("Support Group Meeting", "Weekly support group for individuals dealing with anxiety and depression."),
            ],
            grid="events-grid",
        ),
        ContactPage(),
        GetStartedPage(),
        DashboardPage(),
    ]
    return {handler.name: handler for handler in handlers}
