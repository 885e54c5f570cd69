"""
Reference catalog for the Alien: Earth character quiz.
"""

MAX_SCORE_PER_QUESTION = 3

CHARACTERS = [
    {
        "id": "survivor",
        "name": "Earth Survivor",
        "role": "The Resistant",
        "description": (
            "You are a resilient person who adapted to the new post-invasion reality. "
            "As an Earth Survivor you developed exceptional survival skills and an iron "
            "determination to protect humanity. Your experience fighting the Xenomorphs "
            "made you a natural leader among the resistance."
        ),
        "icon": "shield",
        "traits": {"courage": 9, "survival": 10, "leadership": 8, "adaptability": 7},
    },
    {
        "id": "synthetic",
        "name": "Weyland Android",
        "role": "The Synthetic Protector",
        "description": (
            "You are an advanced synthetic being from Weyland Corporation, programmed to "
            "protect humanity during the alien invasion. You have flawless logic and "
            "superior combat skills, but you have also come to understand the value of "
            "human life and the importance of preserving the species."
        ),
        "icon": "cpu",
        "traits": {"logic": 10, "protection": 9, "efficiency": 8, "loyalty": 9},
    },
    {
        "id": "hybrid",
        "name": "Evolved Hybrid",
        "role": "The Adapted",
        "description": (
            "You are the result of the natural evolution between human and Xenomorph on "
            "Earth. You combine human intelligence with alien physical abilities. This "
            "duality lets you understand both sides of the conflict and find solutions "
            "others cannot see, bridging two worlds."
        ),
        "icon": "git-merge",
        "traits": {"evolution": 10, "duality": 9, "insight": 8, "adaptation": 10},
    },
]

QUESTIONS = [
    {
        "id": 1,
        "text": "Earth has been invaded by Xenomorphs. You hear screams coming from a nearby building. How do you react?",
        "options": [
            {"text": "I run to help right away, even knowing the danger",
             "scores": {"survivor": 3, "synthetic": 1, "hybrid": 2}},
            {"text": "I assess the situation and plan a safe, efficient approach",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "I feel a strange connection to the situation and trust my instincts",
             "scores": {"survivor": 2, "synthetic": 1, "hybrid": 3}},
        ],
    },
    {
        "id": 2,
        "text": "You find a wounded survivor. They beg for help, but they might be infected. What do you do?",
        "options": [
            {"text": "I help immediately, every human life is worth the risk",
             "scores": {"survivor": 3, "synthetic": 1, "hybrid": 2}},
            {"text": "I keep a safe distance and run a full medical assessment first",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "I can sense whether something is different about them, I trust my unique perception",
             "scores": {"survivor": 2, "synthetic": 1, "hybrid": 3}},
        ],
    },
    {
        "id": 3,
        "text": "Your team is split over an important decision. How do you react?",
        "options": [
            {"text": "I firmly defend my opinion and try to convince the others",
             "scores": {"survivor": 3, "synthetic": 1, "hybrid": 2}},
            {"text": "I present all the data and let logic prevail",
             "scores": {"survivor": 2, "synthetic": 3, "hybrid": 1}},
            {"text": "I look for a middle ground that meets everyone's needs",
             "scores": {"survivor": 1, "synthetic": 2, "hybrid": 3}},
        ],
    },
    {
        "id": 4,
        "text": "You face a hard moral dilemma. How do you make your decision?",
        "options": [
            {"text": "I always put people's protection and safety first",
             "scores": {"survivor": 3, "synthetic": 2, "hybrid": 1}},
            {"text": "I coldly weigh the pros and cons of each option",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "I follow my heart, even if I am misunderstood",
             "scores": {"survivor": 2, "synthetic": 1, "hybrid": 3}},
        ],
    },
    {
        "id": 5,
        "text": "In a situation of extreme danger, what is your greatest strength?",
        "options": [
            {"text": "My unshakable determination and courage in the face of fear",
             "scores": {"survivor": 3, "synthetic": 1, "hybrid": 2}},
            {"text": "My ability to think clearly under pressure",
             "scores": {"survivor": 2, "synthetic": 3, "hybrid": 1}},
            {"text": "My ability to adapt quickly to any situation",
             "scores": {"survivor": 1, "synthetic": 2, "hybrid": 3}},
        ],
    },
    {
        "id": 6,
        "text": "How do you deal with loneliness and isolation in space?",
        "options": [
            {"text": "I focus on my responsibilities and the people I need to protect",
             "scores": {"survivor": 3, "synthetic": 2, "hybrid": 1}},
            {"text": "I use the time to process information and optimise systems",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "I dive into deep reflections about my existence",
             "scores": {"survivor": 2, "synthetic": 1, "hybrid": 3}},
        ],
    },
    {
        "id": 7,
        "text": "How would you approach an unknown piece of alien technology?",
        "options": [
            {"text": "Extreme caution, I check every risk before any interaction",
             "scores": {"survivor": 3, "synthetic": 2, "hybrid": 1}},
            {"text": "Systematic analysis, I study each component methodically",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "Natural intuition, I feel I can understand its nature",
             "scores": {"survivor": 2, "synthetic": 1, "hybrid": 3}},
        ],
    },
    {
        "id": 8,
        "text": "If you could choose one special ability, what would it be?",
        "options": [
            {"text": "Extraordinary physical and mental endurance",
             "scores": {"survivor": 3, "synthetic": 1, "hybrid": 2}},
            {"text": "The capacity to process and store information without limit",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "The ability to understand and communicate with any form of life",
             "scores": {"survivor": 2, "synthetic": 2, "hybrid": 3}},
        ],
    },
    {
        "id": 9,
        "text": "In an emergency, what would your ideal role on the team be?",
        "options": [
            {"text": "The leader who makes the hard calls and protects the team",
             "scores": {"survivor": 3, "synthetic": 2, "hybrid": 1}},
            {"text": "The technical specialist who delivers precise solutions",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "The mediator who finds unique alternative paths",
             "scores": {"survivor": 2, "synthetic": 1, "hybrid": 3}},
        ],
    },
    {
        "id": 10,
        "text": "Which sentence best describes your philosophy of life?",
        "options": [
            {"text": "\"Surviving is not enough, we must protect those who cannot protect themselves\"",
             "scores": {"survivor": 3, "synthetic": 1, "hybrid": 2}},
            {"text": "\"Logic and knowledge are the most powerful tools in the universe\"",
             "scores": {"survivor": 1, "synthetic": 3, "hybrid": 2}},
            {"text": "\"There is beauty and purpose in the union of different worlds\"",
             "scores": {"survivor": 2, "synthetic": 2, "hybrid": 3}},
        ],
    },
]

DEFAULT_CATALOG = {
    "maxScorePerQuestion": MAX_SCORE_PER_QUESTION,
    "characters": CHARACTERS,
    "questions": QUESTIONS,
}
