"""
SIMS Dashboard - Seed Data
Hard-coded series data loaded into a fresh store on every run
"""

import copy
import logging
from typing import Optional

from .schema import EventRecordStore, Snapshot

logger = logging.getLogger(__name__)

DEFAULT_SERIES = "i3 Day | Clash of Cards"

MOCK_USERS = [
    {"id": 1, "name": "Alex Johnson", "email": "alex.j@sims.demo", "role": "user",
     "avatar": "https://i.pravatar.cc/150?u=user1"},
    {"id": 2, "name": "Brenda Smith", "email": "brenda.s@sims.demo", "role": "officer",
     "avatar": "https://i.pravatar.cc/150?u=user2"},
    {"id": 3, "name": "Chris Lee", "email": "chris.l@sims.demo", "role": "admin",
     "avatar": "https://i.pravatar.cc/150?u=user3"},
]

I3_DAY_RULES = {
    "title": "i3 Day | Clash of Cards",
    "subtitle": "CIT Tech and Sports Fest 2025",
    "sdgs": ["#SDG9", "#SDG13", "#SDG17"],
    "objectives": [
        "To showcase the diverse talents and skills of information technology students and faculty, "
        "fostering a sense of community and camaraderie.",
        "To promote sportsmanship, healthy competition, and community spirit among students, faculty, "
        "and the wider IT community, encourage teamwork, and foster a supportive atmosphere that "
        "promotes growth and learning.",
    ],
    "house_rules": [
        {"title": "Attendance and Participation", "rules": [
            "All students are required to participate in the events assigned to their units. "
            "Attendance is mandatory and will be strictly monitored.",
            "This activity is part of the college calendar and is considered a regular class schedule. "
            "Therefore, students are expected to attend and actively participate in their assigned units.",
            "While the event includes competitions, its primary goal is to promote unity and cooperation "
            "among all students, not just to compete for victory.",
            "Double entries in solo events are not allowed, except in team events, or there's such cases "
            "where the players are limited and needed to play to represent the team.",
        ]},
        {"title": "Responsibilities of Unit Advisers and Leaders", "rules": [
            "Unit advisers and leaders must ensure that all members are actively involved in the events. "
            "They are also responsible for implementing a buddy system to help manage their unit members.",
            "Students are expected to maintain discipline throughout the event.",
        ]},
        {"title": "Demerit System", "rules": [
            "A demerit system will be implemented for any rule violations. Deductions will be made from "
            "the unit's overall score.",
            "The current point standings will be displayed publicly to promote accountability and awareness.",
        ]},
        {"title": "Complaint and Grievance Procedure", "rules": [
            "All complaints must be submitted to the Grievance Committee at least 3 hours before the event.",
            "The Committee's decision is final.",
            "Misconduct, cheating, or disrespect toward officials will result in disqualification.",
            "Complaints or protests must be filed through the Secretariat for proper handling.",
            "Appeals will be considered if filed no less than 3 hours before or at least one day before "
            "the event for review and approval by the Steering Committee.",
        ]},
        {"title": "Forfeits and Unsportsmanlike Behavior", "rules": [
            "A unit that refuses to play or walks out automatically forfeits the event.",
            "Any unsportsmanlike behavior will result in the disqualification of the player.",
            "A second violation will cause the player to be barred from future events.",
        ]},
    ],
    "demerit_deductions": [
        {"offense": "Abrupt back-out, refusal to play, or walkout", "deduction": "0 points per event"},
        {"offense": "Unsportsmanlike behavior", "deduction": "-25 points per incident"},
        {"offense": "Spying on another team (intentional)", "deduction": "-500 points"},
        {"offense": "Spying on another team (unintentional/warning)", "deduction": "-100 points"},
    ],
    "scoring": {
        "base_points": [
            {"type": "Solo Events", "points": "1,000"},
            {"type": "Duo-4 Member Events", "points": "1,200"},
            {"type": "5-Member or Team Events", "points": "1,500"},
        ],
        "placement": [
            {"place": "1st Place", "points": "100% (Full points)"},
            {"place": "2nd Place", "points": "80% of 1st Place"},
            {"place": "3rd Place", "points": "80% of 2nd Place"},
            {"place": "4th Place", "points": "80% of 3rd Place"},
        ],
        "merit_points": [
            {"category": "Attendance (1st/2nd/3rd/4th)", "points": "500/400/300/200 pts"},
            {"category": "Outstanding Sportsmanship", "points": "50 pts"},
            {"category": "Discipline and Cooperation", "points": "50 pts"},
            {"category": "Highest Participating Members (1st/2nd/3rd/4th)", "points": "1,000/900/800/700 pts"},
        ],
    },
    "team_formation": {
        "leaders": [
            {"position": "Unit Leader", "count": 1,
             "description": "Leads and manages the entire unit. Oversees all activities, makes decisions, "
                            "assigns tasks, and reports directly to the S-ALT Officers. Ensures coordination "
                            "and teamwork among members."},
            {"position": "Unit Secretary", "count": 1,
             "description": "Acts as the right hand of the leader. Records meeting notes, tracks attendance, "
                            "manages documents, and keeps members informed."},
            {"position": "Unit Treasurer", "count": 1,
             "description": "Handles all financial matters of the unit. Collects and records contributions, "
                            "manages the budget, and reports expenses to the leader."},
            {"position": "Operational Errands", "count": 4,
             "description": "Provides manpower and logistical support. Buys needed materials, assists in "
                            "errands, gathers information, and helps the leader, secretary, and treasurer "
                            "with tasks."},
        ],
        "advisers": "The teams will vote for their own advisers from the faculty. The chosen adviser will be "
                    "the one they will interact with and share their experiences with throughout the games. "
                    "Teams may treat their adviser as a coach, mentor, motivator, or guide during the event.",
        "naming": {
            "description": "The teams will be assigned a team color and will decide what name they will "
                           "create to complete their signature team name.",
            "teams": [
                {"name": "Spades", "color": "Black"},
                {"name": "Clubs", "color": "Green"},
                {"name": "Hearts", "color": "Red"},
                {"name": "Diamonds", "color": "Blue"},
            ],
            "format": "Team Color + Team name. E.g., AMARANTH JOKER",
        },
    },
}


def _empty_details():
    return {"merits": [], "demerits": [], "event_scores": []}


I3_DAY_LEADERBOARD = [
    {"rank": 1, "name": "Midnight Spades", "score": 2850, "previous_scores": [2800, 2750],
     "wins": 12, "losses": 2, "players": 15, "live": True, "details": {
         "merits": [
             {"category": "Attendance", "points": 500, "description": "Highest attendance",
              "updated_by": "Brenda Smith"},
             {"category": "Sportsmanship", "points": 50, "description": "Fair play in Basketball",
              "updated_by": "Brenda Smith"},
         ],
         "demerits": [
             {"reason": "Late for event", "points": 20, "person": "John Doe", "updated_by": "Chris Lee"},
         ],
         "event_scores": [
             {"event_name": "Basketball", "placement": 1, "base_points": 1500, "competition_points": 1500,
              "scorecard": [{"judge": "Mr. Davison", "scores": [{"criteria": "Offense", "score": 90},
                                                                {"criteria": "Defense", "score": 85}]}]},
             {"event_name": "Chess", "placement": 2, "base_points": 1000, "competition_points": 800,
              "scorecard": [{"judge": "Ms. Carol", "scores": [{"criteria": "Strategy", "score": 92},
                                                              {"criteria": "Speed", "score": 78}]}]},
         ],
     }},
    {"rank": 2, "name": "Scarlet Hearts", "score": 2400, "previous_scores": [2420, 2350],
     "wins": 10, "losses": 4, "players": 14, "live": False, "details": {
         "merits": [
             {"category": "Discipline", "points": 50, "description": "Excellent cooperation",
              "updated_by": "Brenda Smith"},
         ],
         "demerits": [],
         "event_scores": [
             {"event_name": "Volleyball", "placement": 1, "base_points": 1500, "competition_points": 1500,
              "scorecard": []},
             {"event_name": "Debate", "placement": 3, "base_points": 1200, "competition_points": 768,
              "scorecard": []},
         ],
     }},
    {"rank": 3, "name": "Emerald Clover", "score": 1980, "previous_scores": [1950, 2000],
     "wins": 9, "losses": 5, "players": 15, "live": False, "details": _empty_details()},
    {"rank": 4, "name": "Glacier Diamonds", "score": 1850, "previous_scores": [1800, 1820],
     "wins": 8, "losses": 6, "players": 13, "live": False, "details": _empty_details()},
]

I3_DAY_EVENTS = [
    {"id": 1, "category": "Joker Flag", "name": "Joker Flag (Chant, Silent Drill, Yell)",
     "officer": "Bhenny & Foncee", "participants": "ALL", "judges": ["Judge A", "Judge B"],
     "description": "The Joker Flag serves as the ultimate symbol of team spirit, unity, and dominance "
                    "throughout the competition. When the Joker Flag is marched into the game area, the "
                    "supporting audience members of that team must perform their routines according to "
                    "the designated wave. Each team will showcase its pride and creativity through three "
                    "waves of performance: Chant, Silent Drill, and Yell. Each wave must last for a minimum "
                    "of 1 minute and will be judged based on the given criteria.",
     "details": [
         {"title": "WAVE 1 - CHANT",
          "description": "A rhythmic and melodic team chant that promotes the team's identity and energy. "
                         "The chant may be accompanied by coordinated movements, claps, or beats, but should "
                         "primarily highlight vocal unity and synchronization.",
          "guidelines": ["Duration: Minimum of 1 minute", "Focus on rhythm, clarity, and team synergy",
                         "Lyrics must reflect the team's values, name, or spirit",
                         "Must be appropriate and respectful in content"],
          "criteria": [
              {"name": "Creativity & Originality",
               "description": "Uniqueness and innovative approach in chant composition and presentation",
               "points": 30},
              {"name": "Synchronization & Coordination",
               "description": "Timing, teamwork, and alignment of movement and rhythm", "points": 30},
              {"name": "Energy & Delivery",
               "description": "Enthusiasm, projection, and liveliness of performance", "points": 20},
              {"name": "Clarity & Team Identity",
               "description": "Clear diction, message, and reflection of the team's character", "points": 20},
          ],
          "competition_points": 1000},
         {"title": "WAVE 2 - SILENT DRILL",
          "description": "A performance showcasing precision, discipline, and creativity using body "
                         "percussion, movement, and improvised rhythms. Limited vocal use is allowed, but "
                         "emphasis should be on non-verbal synchronization and impact.",
          "guidelines": ["Duration: Minimum of 1 minute",
                         "Must use body, claps, stomps, or objects (no musical instruments)",
                         "Vocal sounds allowed but minimal",
                         "Emphasis on timing, formation, and group coordination"],
          "criteria": [
              {"name": "Precision & Timing",
               "description": "Accuracy and uniformity in movements and beats", "points": 30},
              {"name": "Creativity & Use of Body Percussion",
               "description": "Innovation in creating sound and rhythm using the body or improvised means",
               "points": 30},
              {"name": "Synchronization & Formation",
               "description": "Cohesiveness of the group and formation transitions", "points": 20},
              {"name": "Overall Impact & Discipline",
               "description": "General impression, composure, and performance quality", "points": 20},
          ],
          "competition_points": 1000},
         {"title": "WAVE 3 - YELL",
          "description": "An intense and powerful vocal performance designed to intimidate rival teams and "
                         "boost team morale. This wave highlights strength, confidence, and the team's "
                         "competitive spirit through commanding chants and unified expressions.",
          "guidelines": ["Duration: Minimum of 1 minute", "Focus on volume, projection, and intensity",
                         "Must remain respectful (no offensive language or gestures)",
                         "May include brief team slogans or cheers"],
          "criteria": [
              {"name": "Intensity & Energy",
               "description": "Strength and enthusiasm in vocal performance", "points": 30},
              {"name": "Unity & Vocal Power",
               "description": "Harmony, coordination, and equal participation", "points": 30},
              {"name": "Message & Delivery",
               "description": "Clarity and effectiveness of the yell's message", "points": 20},
              {"name": "Stage Presence & Confidence",
               "description": "Body language, expression, and command of space", "points": 20},
          ],
          "competition_points": 1000},
     ]},
    {"id": 4, "category": "CIT Quest", "name": "Cheer Dance", "officer": "Yesha", "participants": "10-15",
     "judges": [], "description": "A dynamic performance blending dance and cheerleading elements.",
     "details": [
         {"title": "Mechanics",
          "guidelines": [
              "Each unit shall have one (1) entry with 10-15 performers (mixed gender).",
              "The routine must incorporate essential cheerleading elements: dance techniques, formations, "
              "and group stunts/pyramids (basket tosses and other high-risk aerial stunts are prohibited "
              "for safety).",
              "The team can make use of their own song choice as music.",
              "The performance must not exceed 5 minutes, including entrance and exit.",
              "The use of props (e.g., pompoms, flags, banners) is allowed as long as you take extra "
              "precautions and ensure safety.",
          ],
          "criteria": [
              {"name": "Choreography (Creativity & Artistry)",
               "description": "Originality, creativity, complexity, transitions, and overall composition.",
               "points": 50},
              {"name": "Execution & Energy",
               "description": "Precision, synchronization, consistency, enthusiasm, and stage presence.",
               "points": 30},
              {"name": "Costume & Visuals",
               "description": "Appropriateness, design, and appeal of costumes and props.", "points": 10},
              {"name": "Overall Impact",
               "description": "Crowd appeal, confidence, and how well all elements come together.", "points": 10},
          ],
          "competition_points": 1500},
     ]},
    {"id": 5, "category": "CIT Quest", "name": "Banner Competition", "officer": "Yesha", "participants": "1",
     "judges": [], "details": []},
    {"id": 6, "category": "CIT Quest", "name": "Cosplay", "officer": "Yesha", "participants": "1",
     "judges": [], "details": []},
    {"id": 7, "category": "CIT Quest", "name": "Amazing Race", "officer": "Yesha", "participants": "ALL",
     "judges": [], "details": []},
    {"id": 8, "category": "CIT Quest", "name": "Larong Lahi", "officer": "Yesha", "participants": "Varies",
     "judges": [], "details": []},
    {"id": 11, "category": "CIT Quest", "name": "General Quiz", "officer": "Yesha", "participants": "All",
     "judges": [], "details": []},
    {"id": 31, "category": "Pixel Play", "name": "Solo and Duet Singing", "officer": "Sean",
     "participants": "1-2", "judges": [], "details": []},
    {"id": 12, "category": "Mindscape", "name": "Essay Writing (Filipino)", "officer": "Lryn",
     "participants": "1", "judges": [], "details": []},
    {"id": 13, "category": "Mindscape", "name": "Essay Writing (English)", "officer": "Lryn",
     "participants": "1", "judges": [], "details": []},
    {"id": 14, "category": "Mindscape", "name": "Debate", "officer": "Lryn", "participants": "3",
     "judges": [], "details": []},
    {"id": 19, "category": "Hoop & Spike", "name": "Basketball", "officer": "Joshua & Jericho",
     "participants": "12 Men | 5 Women", "judges": [], "details": []},
    {"id": 23, "category": "Cipher Matrix", "name": "Programming", "officer": "Lorenz",
     "participants": "4 (1st-4th year)", "judges": [], "details": []},
    {"id": 37, "category": "Table Masters", "name": "Chess", "officer": "Jeverlyn",
     "participants": "1 male | 1 female", "judges": [], "details": []},
]

I3_DAY_STAT_CARDS = [
    {"team": "Midnight Spades", "points": "2850", "games": 14, "change": 43.5, "color": "#3b82f6"},
    {"team": "Scarlet Hearts", "points": "2400", "games": 14, "change": 22.1, "color": "#ef4444"},
    {"team": "Emerald Clover", "points": "1980", "games": 14, "change": -5.8, "color": "#22c55e"},
    {"team": "Glacier Diamonds", "points": "1850", "games": 14, "change": 10.3, "color": "#0ea5e9"},
]


def _empty_series():
    return {"stat_cards": [], "leaderboard": [], "events": [], "top_players": [], "rules": None}


def build_initial_data() -> Snapshot:
    """Build a fresh snapshot; nothing is shared with the module-level seed records"""
    return {
        DEFAULT_SERIES: {
            "stat_cards": copy.deepcopy(I3_DAY_STAT_CARDS),
            "leaderboard": copy.deepcopy(I3_DAY_LEADERBOARD),
            "events": copy.deepcopy(I3_DAY_EVENTS),
            "top_players": copy.deepcopy(MOCK_USERS),
            "rules": copy.deepcopy(I3_DAY_RULES),
        },
        "Campus Clash": _empty_series(),
        "Intramurals": _empty_series(),
    }


def build_store(selected_series: Optional[str] = None) -> EventRecordStore:
    """Create a store loaded with seed data and run its consistency checks"""
    store = EventRecordStore(build_initial_data(), selected_series or DEFAULT_SERIES)

    report = store.validate_integrity()
    if not report["valid"]:
        for issue in report["issues"]:
            logger.warning("Seed data issue: %s", issue)

    logger.info("Loaded %d event series (selected: %s)", len(store.series_names), store.selected_series)
    return store
