"""Demo catalogue used by the command line front end."""

from typing import List

from .application.content_controller import ContentController
from .domain.content import Article, Content, Image, Video
from .domain.taxonomy import Taxonomy
from .domain.users import Administrator

CATEGORIES = [
    ("Programming", "Programming tutorials and articles"),
    ("Mathematics", "Mathematics content"),
    ("Physics", "Physics content"),
    ("Design", "Graphic design content"),
    ("Music", "Music theory content"),
]


def build_taxonomy() -> Taxonomy:
    taxonomy = Taxonomy()
    for name, description in CATEGORIES:
        taxonomy.add_category(name, description)
    return taxonomy


def load_sample_content(controller: ContentController, taxonomy: Taxonomy) -> List[Content]:
    """Create four demo items; the first two are published.

    Seeding runs as a throwaway administrator so it works whatever actor is
    bound to ``controller``.
    """
    seeder = Administrator(username="seed", password="")
    programming = taxonomy.find_category("Programming")
    mathematics = taxonomy.find_category("Mathematics")

    intro = Article(
        title="Introduction to Python",
        author="Dr. Garcia",
        category=programming,
        body=(
            "Python is a high-level, general-purpose programming language. "
            "Its design philosophy emphasizes code readability, and it is widely "
            "used for web services, data analysis and automation."
        ),
    )
    intro.add_tag(taxonomy.tag("python"))
    intro.add_tag(taxonomy.tag("beginner"))

    oop = Video(
        title="Object-Oriented Programming Tutorial",
        author="Prof. Martinez",
        category=programming,
        url="https://example.com/video1.mp4",
        duration=1800,
        resolution="1080p",
    )
    oop.add_tag(taxonomy.tag("python"))

    uml = Image(
        title="UML Diagram",
        author="Eng. Lopez",
        category=programming,
        url="https://example.com/uml-diagram.png",
        dimensions="1920x1080",
        format="png",
    )

    calculus = Article(
        title="Differential Calculus",
        author="Dr. Ramirez",
        category=mathematics,
        body=(
            "Differential calculus is the branch of mathematics that studies rates "
            "of change of functions. It underpins mathematical analysis and has "
            "applications in physics, engineering and economics."
        ),
    )

    items = [intro, oop, uml, calculus]
    for item in items:
        controller.create(item, actor=seeder)
    for item in (intro, oop):
        controller.publish_content(item.id, actor=seeder)
    return items
