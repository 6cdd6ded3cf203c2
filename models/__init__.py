"""Database models package.

This package contains the SQLAlchemy ORM model definitions for the application.
Each model lives in its own module and is re-exported here for convenience.
The `init_default_coping_tools` helper populates the coping-tool catalog and
is the only place that decides which tools are mandatory.
"""

# Re-export model classes from individual modules
from .user import User  # noqa: F401
from .auth_session import AuthSession  # noqa: F401
from .coping_tool import CopingTool, CopingToolCompletion  # noqa: F401
from .craving_session import CravingSession, NEED_TYPES  # noqa: F401
from .journal_entry import JournalEntry, OUTCOMES  # noqa: F401
from .calendar_event import CalendarEvent  # noqa: F401

__all__ = [
    "User",
    "AuthSession",
    "CopingTool",
    "CopingToolCompletion",
    "CravingSession",
    "JournalEntry",
    "CalendarEvent",
    "NEED_TYPES",
    "OUTCOMES",
    "MANDATORY_TOOL_IDS",
    "DEFAULT_COPING_TOOLS",
    "init_default_coping_tools",
]

MANDATORY_TOOL_IDS = (
    'tool-deep-breathing',
    'tool-box-breathing',
    'tool-grounding',
    'tool-delay-10',
    'tool-change-location',
)

DEFAULT_COPING_TOOLS = [
    {
        "id": "tool-deep-breathing",
        "title": "Deep Breathing",
        "duration": "5 minutes",
        "steps": [
            "Find a comfortable position",
            "Breathe in slowly through your nose for 4 counts",
            "Hold your breath for 4 counts",
            "Exhale slowly through your mouth for 6 counts",
            "Repeat 5-10 times",
        ],
        "when_to_use": "When feeling anxious or overwhelmed",
    },
    {
        "id": "tool-box-breathing",
        "title": "Box Breathing",
        "duration": "5 minutes",
        "steps": [
            "Breathe in for 4 counts",
            "Hold for 4 counts",
            "Breathe out for 4 counts",
            "Hold for 4 counts",
            "Repeat 5 times",
        ],
        "when_to_use": "When feeling stressed or anxious",
    },
    {
        "id": "tool-grounding",
        "title": "Grounding Exercise",
        "duration": "5 minutes",
        "steps": [
            "Name 5 things you can see",
            "Name 4 things you can touch",
            "Name 3 things you can hear",
            "Name 2 things you can smell",
            "Name 1 thing you can taste",
        ],
        "when_to_use": "When feeling disconnected or panicked",
    },
    {
        "id": "tool-progressive-muscle",
        "title": "Progressive Muscle Relaxation",
        "duration": "10 minutes",
        "steps": [
            "Start with your feet, tense for 5 seconds",
            "Release and notice the relaxation",
            "Move up to your calves, repeat",
            "Continue through each muscle group",
            "End with your face and head",
        ],
        "when_to_use": "When experiencing physical tension",
    },
    {
        "id": "tool-affirmations",
        "title": "Positive Affirmations",
        "duration": "3 minutes",
        "steps": [
            "I am strong and capable",
            "I choose health and wellness",
            "Every day I am getting better",
            "I deserve a life of recovery",
            "I am proud of my progress",
        ],
        "when_to_use": "When needing motivation",
    },
    {
        "id": "tool-distraction",
        "title": "Distraction Techniques",
        "duration": "15 minutes",
        "steps": [
            "Call a supportive friend or family member",
            "Go for a walk or exercise",
            "Listen to your favorite music",
            "Engage in a hobby or creative activity",
            "Watch a funny video or movie",
        ],
        "when_to_use": "When experiencing strong cravings",
    },
    {
        "id": "tool-urge-surfing",
        "title": "Urge Surfing",
        "duration": "15 minutes",
        "steps": [
            "Acknowledge the craving without judgment",
            "Notice where you feel it in your body",
            "Observe how it changes over time",
            "Remember: cravings peak and then subside",
            "Wait 15-20 minutes before making any decisions",
        ],
        "when_to_use": "During intense cravings",
    },
    {
        "id": "tool-delay-10",
        "title": "10-Minute Delay",
        "duration": "10 minutes",
        "steps": [
            "Set a timer for 10 minutes",
            "Engage in a distracting activity",
            "Wait for the timer to go off",
            "Reassess how you're feeling",
            "Decide if you still need the substance",
        ],
        "when_to_use": "When experiencing cravings",
    },
    {
        "id": "tool-change-location",
        "title": "Change Your Location",
        "duration": "5 minutes",
        "steps": [
            "Identify your current location",
            "Leave immediately to a different place",
            "Go to a safe, supportive environment",
            "Spend at least 5 minutes there",
            "Reassess your craving intensity",
        ],
        "when_to_use": "When triggered by your environment",
    },
    {
        "id": "tool-short-walk",
        "title": "Short Walk",
        "duration": "5 minutes",
        "steps": [
            "Stand up and put on comfortable shoes",
            "Step outside or find a safe indoor space",
            "Walk at a moderate pace for 5 minutes",
            "Focus on your surroundings",
            "Return and reassess your craving",
        ],
        "when_to_use": "When needing physical activity and a change of scenery",
    },
    {
        "id": "tool-cold-water",
        "title": "Cold Water Immersion",
        "duration": "2 minutes",
        "steps": [
            "Fill a bowl with cold water",
            "Submerge your face or hands for 30 seconds",
            "Take deep breaths",
            "Repeat 2-3 times if needed",
            "Notice the change in your mental state",
        ],
        "when_to_use": "When needing an immediate physical reset",
    },
    {
        "id": "tool-reach-out",
        "title": "Reach Out to Someone",
        "duration": "10 minutes",
        "steps": [
            "Identify a trusted person you can contact",
            "Call, text, or visit them",
            "Share how you're feeling",
            "Listen to their support and advice",
            "Feel the connection and strength",
        ],
        "when_to_use": "When feeling isolated or overwhelmed",
    },
]

def init_default_coping_tools():
    """
    Initialize the database with the default coping-tool catalog.

    Existing tools (matched by title) only have their mandatory flag
    refreshed; tools outside the default catalog are forced non-mandatory.
    Returns the number of tools created.
    """
    import logging
    from extensions import db
    from .coping_tool import CopingTool

    logger = logging.getLogger(__name__)
    created = 0

    for tool_data in DEFAULT_COPING_TOOLS:
        is_mandatory = tool_data["id"] in MANDATORY_TOOL_IDS
        existing = CopingTool.query.filter_by(title=tool_data["title"]).first()

        if existing:
            existing.is_mandatory = is_mandatory
            continue

        db.session.add(CopingTool(
            id=tool_data["id"],
            title=tool_data["title"],
            duration=tool_data["duration"],
            steps=list(tool_data["steps"]),
            when_to_use=tool_data["when_to_use"],
            is_mandatory=is_mandatory,
        ))
        created += 1

    default_titles = {tool_data["title"] for tool_data in DEFAULT_COPING_TOOLS}
    for tool in CopingTool.query.filter(CopingTool.title.notin_(default_titles)).all():
        if tool.is_mandatory:
            logger.info(f'Coping tool {tool.title} is not in the default catalog, marking non-mandatory')
            tool.is_mandatory = False

    try:
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        logger.error(f"Error initializing default coping tools: {e}")
        raise
    return created
