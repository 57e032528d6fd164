"""Human-friendly placeholder names for anonymous customers."""

from __future__ import annotations

import secrets

COLORS = (
    "Amber", "Aqua", "Azure", "Beige", "Black", "Blue", "Bronze", "Brown",
    "Coral", "Crimson", "Cyan", "Gold", "Gray", "Green", "Indigo", "Ivory",
    "Jade", "Lavender", "Lime", "Magenta", "Maroon", "Navy", "Olive", "Orange",
    "Peach", "Pink", "Plum", "Purple", "Red", "Ruby", "Salmon", "Silver",
    "Tan", "Teal", "Turquoise", "Violet", "White", "Yellow",
)

ANIMALS = (
    "Albatross", "Alpaca", "Badger", "Bat", "Bear", "Beaver", "Bison", "Camel",
    "Cat", "Cheetah", "Cobra", "Crane", "Deer", "Dolphin", "Eagle", "Falcon",
    "Ferret", "Fox", "Gazelle", "Gecko", "Heron", "Ibis", "Jaguar", "Koala",
    "Lemur", "Lion", "Lynx", "Marten", "Moose", "Otter", "Owl", "Panda",
    "Panther", "Parrot", "Penguin", "Puffin", "Rabbit", "Raven", "Seal",
    "Shark", "Sparrow", "Swan", "Tiger", "Toucan", "Turtle", "Walrus",
    "Whale", "Wolf", "Yak", "Zebra",
)


def generate_random_name() -> str:
    return f"{secrets.choice(COLORS)} {secrets.choice(ANIMALS)}"
