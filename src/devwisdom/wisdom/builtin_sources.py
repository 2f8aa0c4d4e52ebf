"""Built-in wisdom sources.

Same shape as a ``sources.json`` "sources" mapping, so the loader treats
these as the lowest-priority configuration layer.
"""

from __future__ import annotations

from typing import Any

BUILTIN_SOURCES: dict[str, dict[str, Any]] = {
    "pistis_sophia": {
        "name": "Pistis Sophia",
        "icon": "📜",
        "description": "Gnostic journey through the aeons toward enlightenment",
        "quotes": {
            "chaos": [
                {
                    "quote": "I cried out for help, but there was none; I sought the light, and the darkness surrounded me.",
                    "source": "Pistis Sophia, Chapter 32",
                    "encouragement": "Even Sophia began in chaos. Name the darkness, then find the first step out of it.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "Save me, O Light, for evil thoughts have come in unto me.",
                    "source": "Pistis Sophia, Chapter 33",
                    "encouragement": "Doubt is part of the ascent. Fix one thing today.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "The light hath become a wreath round my head.",
                    "source": "Pistis Sophia, Chapter 59",
                    "encouragement": "You are halfway up. Keep the discipline that got you here.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "I will sing praises unto thee, O Light, for I desired to come unto thee.",
                    "source": "Pistis Sophia, Chapter 47",
                    "encouragement": "The light is near. Polish what remains.",
                },
            ],
            "treasury": [
                {
                    "quote": "I have become light in the light of the Treasury.",
                    "source": "Pistis Sophia, Chapter 96",
                    "encouragement": "Share what you have learned with those still climbing.",
                },
            ],
        },
    },
    "stoic": {
        "name": "Stoic Philosophers",
        "icon": "🏛️",
        "description": "Marcus Aurelius, Epictetus and Seneca on discipline and equanimity",
        "quotes": {
            "chaos": [
                {
                    "quote": "The impediment to action advances action. What stands in the way becomes the way.",
                    "source": "Marcus Aurelius, Meditations V.20",
                    "encouragement": "Every failing test is a map of the road ahead.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "It is not things that disturb us, but our judgements about things.",
                    "source": "Epictetus, Enchiridion 5",
                    "encouragement": "Separate the facts from the frustration, then act on the facts.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Difficulties strengthen the mind, as labor does the body.",
                    "source": "Seneca, Moral Letters",
                    "encouragement": "The hard parts are making the project stronger.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "Waste no more time arguing about what a good man should be. Be one.",
                    "source": "Marcus Aurelius, Meditations X.16",
                    "encouragement": "Stop polishing the plan and ship the work.",
                },
            ],
            "treasury": [
                {
                    "quote": "No man is free who is not master of himself.",
                    "source": "Epictetus, Discourses",
                    "encouragement": "Mastery is maintained daily, not achieved once.",
                },
            ],
        },
    },
    "tao": {
        "name": "Tao Te Ching",
        "icon": "☯️",
        "description": "Lao Tzu on balance, flow and purpose",
        "quotes": {
            "chaos": [
                {
                    "quote": "A journey of a thousand miles begins with a single step.",
                    "source": "Tao Te Ching, Chapter 64",
                    "encouragement": "Pick the smallest useful step and take it now.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "Deal with the difficult while it is still easy; handle the great while it is still small.",
                    "source": "Tao Te Ching, Chapter 63",
                    "encouragement": "Fix the small cracks before they become rewrites.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Nature does not hurry, yet everything is accomplished.",
                    "source": "Tao Te Ching (attributed)",
                    "encouragement": "Steady progress beats heroic sprints.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "The sage does not accumulate. The more he gives to others, the more he has.",
                    "source": "Tao Te Ching, Chapter 81",
                    "encouragement": "Document and share; the project grows when knowledge flows.",
                },
            ],
            "treasury": [
                {
                    "quote": "When the work is done, withdraw. This is the way of heaven.",
                    "source": "Tao Te Ching, Chapter 9",
                    "encouragement": "Know when a feature is finished.",
                },
            ],
        },
    },
    "art_of_war": {
        "name": "The Art of War",
        "icon": "⚔️",
        "description": "Sun Tzu on strategy, preparation and decisive execution",
        "quotes": {
            "chaos": [
                {
                    "quote": "In the midst of chaos, there is also opportunity.",
                    "source": "Sun Tzu, The Art of War",
                    "encouragement": "Find the one fix that unlocks the rest.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "If you know the enemy and know yourself, you need not fear the result of a hundred battles.",
                    "source": "Sun Tzu, The Art of War III",
                    "encouragement": "Measure before you refactor.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Victorious warriors win first and then go to war.",
                    "source": "Sun Tzu, The Art of War IV",
                    "encouragement": "Plan the release before you cut it.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "Let your plans be dark and impenetrable as night, and when you move, fall like a thunderbolt.",
                    "source": "Sun Tzu, The Art of War VII",
                    "encouragement": "Prepare thoroughly, then execute decisively.",
                },
            ],
            "treasury": [
                {
                    "quote": "The supreme art of war is to subdue the enemy without fighting.",
                    "source": "Sun Tzu, The Art of War III",
                    "encouragement": "Prevent problems instead of fighting them.",
                },
            ],
        },
    },
    "confucius": {
        "name": "Confucius",
        "icon": "🎓",
        "description": "The Analects on learning, teaching and right conduct",
        "quotes": {
            "chaos": [
                {
                    "quote": "Our greatest glory is not in never falling, but in rising every time we fall.",
                    "source": "Confucius (attributed)",
                    "encouragement": "Get back up; the build can be fixed.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "It does not matter how slowly you go as long as you do not stop.",
                    "source": "Confucius (attributed)",
                    "encouragement": "Small commits still move the project forward.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Learning without thought is labor lost; thought without learning is perilous.",
                    "source": "Analects 2.15",
                    "encouragement": "Read the code, then reason about it.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "When you know a thing, to hold that you know it; and when you do not know a thing, to allow that you do not know it: this is knowledge.",
                    "source": "Analects 2.17",
                    "encouragement": "Write down what is known and what is not.",
                },
            ],
            "treasury": [
                {
                    "quote": "By reviewing the old, one learns the new, and can then be a teacher.",
                    "source": "Analects 2.11",
                    "encouragement": "Teach the next maintainer through good documentation.",
                },
            ],
        },
    },
    "bofh": {
        "name": "BOFH (Bastard Operator From Hell)",
        "icon": "😈",
        "description": "Cynical operations wisdom from the machine room",
        "quotes": {
            "chaos": [
                {
                    "quote": "It's not a bug, it's a feature.",
                    "source": "BOFH Excuse Calendar",
                    "encouragement": "Document it and ship it. Then fix it properly.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "The problem exists between keyboard and chair.",
                    "source": "BOFH",
                    "encouragement": "Assume users will do the unexpected and validate inputs.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Have you tried turning it off and on again?",
                    "source": "BOFH Help Desk Manual",
                    "encouragement": "Reproducible restarts are a feature. Make startup boring.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "Backups are for people who plan to make mistakes. So, everyone.",
                    "source": "BOFH",
                    "encouragement": "Test your restore path before you need it.",
                },
            ],
            "treasury": [
                {
                    "quote": "The system is working perfectly. That is what worries me.",
                    "source": "BOFH",
                    "encouragement": "Stay paranoid; audit the quiet parts.",
                },
            ],
        },
    },
    "murphy": {
        "name": "Murphy's Law",
        "icon": "🔧",
        "description": "Laws of inevitable failure and how to prepare for them",
        "quotes": {
            "chaos": [
                {
                    "quote": "Anything that can go wrong will go wrong.",
                    "source": "Murphy's Law",
                    "encouragement": "Plan for the failure modes you can see.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "Nothing is as easy as it looks.",
                    "source": "Murphy's Law, Corollary 1",
                    "encouragement": "Double your estimate and start anyway.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Everything takes longer than you think.",
                    "source": "Murphy's Law, Corollary 2",
                    "encouragement": "Leave slack in the schedule.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "If you perceive that there are four possible ways in which something can go wrong, a fifth way will promptly develop.",
                    "source": "Murphy's Law, Corollary 5",
                    "encouragement": "Dogfood your own tools to find the fifth way first.",
                },
            ],
            "treasury": [
                {
                    "quote": "If everything seems to be going well, you have obviously overlooked something.",
                    "source": "Murphy's Law, Corollary 6",
                    "encouragement": "Run one more review before celebrating.",
                },
            ],
        },
    },
    "kybalion": {
        "name": "The Kybalion",
        "icon": "⚗️",
        "description": "Hermetic principles of cause, effect and correspondence",
        "quotes": {
            "chaos": [
                {
                    "quote": "Every Cause has its Effect; every Effect has its Cause.",
                    "source": "The Kybalion, Principle of Cause and Effect",
                    "encouragement": "Trace each failure to its cause before patching.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "Nothing rests; everything moves; everything vibrates.",
                    "source": "The Kybalion, Principle of Vibration",
                    "encouragement": "Keep the pipeline moving, even slowly.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "As above, so below; as below, so above.",
                    "source": "The Kybalion, Principle of Correspondence",
                    "encouragement": "Small modules should mirror the design of the whole.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "Everything flows, out and in; everything has its tides.",
                    "source": "The Kybalion, Principle of Rhythm",
                    "encouragement": "Respect the release rhythm.",
                },
            ],
            "treasury": [
                {
                    "quote": "The lips of wisdom are closed, except to the ears of Understanding.",
                    "source": "The Kybalion",
                    "encouragement": "Mentor those who are ready to learn.",
                },
            ],
        },
    },
    "gracian": {
        "name": "Baltasar Gracián",
        "icon": "🎭",
        "description": "The Art of Worldly Wisdom: pragmatic maxims",
        "quotes": {
            "chaos": [
                {
                    "quote": "Never open the door to a lesser evil, for other and greater ones invariably slink in after it.",
                    "source": "The Art of Worldly Wisdom, Maxim 278",
                    "encouragement": "Do not merge the quick hack.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "Think with the few and speak with the many.",
                    "source": "The Art of Worldly Wisdom, Maxim 43",
                    "encouragement": "Design carefully, explain simply.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Good things, when short, are twice as good.",
                    "source": "The Art of Worldly Wisdom, Maxim 105",
                    "encouragement": "Trim the function until it says one thing.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "Know how to leave things alone.",
                    "source": "The Art of Worldly Wisdom, Maxim 138",
                    "encouragement": "Not every working module needs a rewrite.",
                },
            ],
            "treasury": [
                {
                    "quote": "Do not wait till you are a sinking sun.",
                    "source": "The Art of Worldly Wisdom, Maxim 110",
                    "encouragement": "Retire old features while they still shine.",
                },
            ],
        },
    },
    "shakespeare": {
        "name": "William Shakespeare",
        "icon": "🎭",
        "description": "Drama, ambition and human nature",
        "quotes": {
            "chaos": [
                {
                    "quote": "Hell is empty and all the devils are here.",
                    "source": "The Tempest, Act 1 Scene 2",
                    "encouragement": "Name each devil and file a ticket for it.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "Our doubts are traitors, and make us lose the good we oft might win, by fearing to attempt.",
                    "source": "Measure for Measure, Act 1 Scene 4",
                    "encouragement": "Attempt the fix.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "Wisely and slow; they stumble that run fast.",
                    "source": "Romeo and Juliet, Act 2 Scene 3",
                    "encouragement": "Review before you merge.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "We know what we are, but know not what we may be.",
                    "source": "Hamlet, Act 4 Scene 5",
                    "encouragement": "Leave room for the project to surprise you.",
                },
            ],
            "treasury": [
                {
                    "quote": "All's well that ends well.",
                    "source": "All's Well That Ends Well",
                    "encouragement": "Celebrate the release. You earned it.",
                },
            ],
        },
    },
    "tao_of_programming": {
        "name": "The Tao of Programming",
        "icon": "💻",
        "description": "Programming koans in the spirit of the Tao",
        "quotes": {
            "chaos": [
                {
                    "quote": "A program should be light and agile, its subroutines connected like a string of pearls.",
                    "source": "The Tao of Programming 4.1",
                    "encouragement": "Untangle one dependency at a time.",
                },
            ],
            "lower_aeons": [
                {
                    "quote": "Though a program be but three lines long, someday it will have to be maintained.",
                    "source": "The Tao of Programming 5.1",
                    "encouragement": "Write it for the maintainer who comes next.",
                },
            ],
            "middle_aeons": [
                {
                    "quote": "A well-written program is its own heaven; a poorly-written program is its own hell.",
                    "source": "The Tao of Programming 4.1",
                    "encouragement": "Refactor toward heaven.",
                },
            ],
            "upper_aeons": [
                {
                    "quote": "Let the programmers be many and the managers few, then all will be productive.",
                    "source": "The Tao of Programming 7.1",
                    "encouragement": "Keep process light; let the code speak.",
                },
            ],
            "treasury": [
                {
                    "quote": "The Tao gave birth to machine language. Machine language gave birth to the assembler.",
                    "source": "The Tao of Programming 1.2",
                    "encouragement": "Remember the layers beneath your abstractions.",
                },
            ],
        },
    },
}
