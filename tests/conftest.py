"""Shared fixtures for style analysis tests."""

import pytest

from style_consistency_analyzer.config import Settings


BASELINE_SAMPLES = [
    (
        "I walked to the market early on Saturday. The streets were quiet and the air felt cold. "
        "I bought apples, bread and a small jar of honey. The baker knew my name and asked about my "
        "sister. We talked for a while about the weather. Then I carried the bag home and made tea. "
        "My cat waited by the door as usual.\n\n"
        "In the evening I called my sister. She laughed at the story about the cat. We made plans "
        "to visit the coast next month.\n\n"
        "On the way back I stopped at the old bookshop near the bridge. The owner was asleep in "
        "his chair, so I left the money on the counter with a note."
    ),
    (
        "On Sunday I cleaned the kitchen and washed the windows. It took most of the morning. "
        "The radio played old songs while I worked, and I sang along badly. After lunch I sat in "
        "the garden with a book. The roses are finally blooming this year.\n\n"
        "Later my neighbor came over with a basket of plums from her tree. We ate a few on the "
        "porch and talked about the summer. She wants to plant beans next spring.\n\n"
        "In the evening the wind picked up and the rain started. I closed the shutters, lit a "
        "candle and listened to the storm for a long time."
    ),
    (
        "The train was late again this morning. I stood on the platform for twenty minutes and "
        "watched the pigeons. A little boy next to me counted every train that passed. When ours "
        "finally arrived, it was crowded and warm. I found a seat near the back and read the news "
        "on my phone.\n\n"
        "At work the printer was broken, so I wrote my notes by hand. Nobody seemed to mind. I "
        "left early and walked home through the park.\n\n"
        "The sky was clear and the ducks were loud on the pond. I bought a coffee from the cart "
        "by the gate and drank it slowly on a bench."
    ),
    (
        "Yesterday I baked bread for the first time in years. The dough was sticky and I used "
        "too much flour. Still, the loaf rose nicely in the oven. The whole house smelled warm "
        "and sweet. My brother stopped by and ate two thick slices with butter.\n\n"
        "He told me about his new job at the library. He likes the quiet and the old books. We "
        "sat at the table until it got dark outside.\n\n"
        "Before bed I wrote down the recipe so I would not forget it. Next time I will use less "
        "flour and let the dough rest a little longer. It was a good day."
    ),
]

# Dense template prose, far from the baseline voice
FORMULAIC_TEXT = (
    "It is important to note that the multifaceted implementation of comprehensive "
    "organizational methodologies plays a crucial role in facilitating sustainable "
    "institutional transformation across heterogeneous environments. Furthermore, the "
    "utilization of sophisticated analytical frameworks necessitates considerable "
    "interdisciplinary collaboration, particularly regarding the systematic evaluation of "
    "longitudinal performance indicators. Moreover, stakeholders must leverage innovative "
    "technological infrastructures in order to navigate the complexities of contemporary "
    "regulatory landscapes. In conclusion, a wide range of interconnected considerations "
    "underscore the pivotal significance of strategic adaptability."
)

# Free of every catalogued error pattern
CLEAN_TEXT = (
    "Morning light crept across the quiet harbor. Fishermen checked nets and loaded small "
    "boats with bait. A gull circled above the pier and called to the waves. Old ropes lay "
    "coiled beside weathered crates. The tide rolled in slowly, and the water turned from "
    "gray to green. Children ran along the sand with buckets and shovels. By noon the market "
    "was full of voices and the smell of bread."
)

# Baseline samples that all carry the same habitual "could of" error
ERROR_PRONE_SAMPLES = [
    "I could of finished the report sooner. We should of started earlier in the week. "
    "The team worked late most nights.",
    "She would of called me back. I could of waited longer at the station. "
    "The bus came at ten.",
    "They might of missed the turn. We could of taken the other road home. "
    "The drive was long and dark.",
]


@pytest.fixture
def baseline_samples():
    return list(BASELINE_SAMPLES)


@pytest.fixture
def formulaic_text():
    return FORMULAIC_TEXT


@pytest.fixture
def clean_text():
    return CLEAN_TEXT


@pytest.fixture
def error_prone_samples():
    return list(ERROR_PRONE_SAMPLES)


@pytest.fixture
def settings():
    return Settings(_env_file=None)
