from __future__ import annotations

"""
Technology Stack Rule Tables.

Declarative association of marker files and manifest contents with stack
labels. Presence rules look only at the repository root listing; content
rules look inside one manifest. The classifier evaluates every table
uniformly, so extending detection means adding rows here.
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple, Union

from codevisualizer.domain.stack_models import Category, Label
from codevisualizer.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ROOT PROBE AND PREDICATES
# -----------------------------------------------------------------------------

class RootProbe:
    """Case-insensitive view over the direct children of the repository root."""

    def __init__(self, root: TreeNode):
        children = root.children or ()
        self._names = {child.name.lower(): child for child in children}
        self._file_names = [child.name.lower() for child in children if not child.is_dir]

    def has(self, name: str) -> bool:
        return name.lower() in self._names

    def get(self, name: str) -> Optional[TreeNode]:
        return self._names.get(name.lower())

    def has_file_suffix(self, suffix: str) -> bool:
        suffix = suffix.lower()
        return any(name.endswith(suffix) for name in self._file_names)


Predicate = Callable[[RootProbe], bool]


def present(*names: str) -> Predicate:
    """True when any of the named entries exists at the root."""
    return lambda probe: any(probe.has(n) for n in names)


def file_suffix(suffix: str) -> Predicate:
    """True when a direct child file ends with `suffix`."""
    return lambda probe: probe.has_file_suffix(suffix)


def all_of(*predicates: Predicate) -> Predicate:
    return lambda probe: all(p(probe) for p in predicates)


def any_of(*predicates: Predicate) -> Predicate:
    return lambda probe: any(p(probe) for p in predicates)


def absent(predicate: Predicate) -> Predicate:
    return lambda probe: not predicate(probe)

# -----------------------------------------------------------------------------
# RULE TYPES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PresenceRule:
    """Label emitted when `predicate` holds for the root listing."""
    predicate: Predicate
    category: Category
    label: str

    def evaluate(self, probe: RootProbe) -> Optional[Label]:
        return (self.category, self.label) if self.predicate(probe) else None


@dataclass(frozen=True)
class ContentRule:
    """Label emitted when any needle occurs in the extracted manifest data."""
    needles: Tuple[str, ...]
    category: Category
    label: str

    def matches(self, haystack: Union[str, FrozenSet[str]]) -> bool:
        return any(needle in haystack for needle in self.needles)


def dependency_keys(content: str) -> FrozenSet[str]:
    """
    Extract the union of `dependencies` and `devDependencies` names.

    A section that is not an object is skipped; the other one still counts.

    Raises:
        ValueError: Malformed JSON or a document root that is not an object.
    """
    document = json.loads(content)
    if not isinstance(document, dict):
        raise ValueError("package manifest root is not an object")

    keys = set()
    for section in ("dependencies", "devdependencies"):
        deps = document.get(section) or {}
        if not isinstance(deps, dict):
            logger.debug(f"Rules: ignoring non-object '{section}' section.")
            continue
        keys.update(deps)
    return frozenset(keys)


def plain_text(content: str) -> str:
    return content


@dataclass(frozen=True)
class ContentSource:
    """
    Manifest whose contents feed a rule list.

    The first marker present at the root is read. Content is lowercased
    before `extract` runs, so every needle is written in lowercase.
    """
    markers: Tuple[str, ...]
    extract: Callable[[str], Union[str, FrozenSet[str]]]
    rules: Tuple[ContentRule, ...]

    def locate(self, probe: RootProbe) -> Optional[TreeNode]:
        for marker in self.markers:
            node = probe.get(marker)
            if node is not None and not node.is_dir:
                return node
        return None

    def evaluate(self, content: str) -> List[Label]:
        haystack = self.extract(content.lower())
        return [(r.category, r.label) for r in self.rules if r.matches(haystack)]


def _rules(category: Category, rows: Iterable[Tuple[Union[str, Tuple[str, ...]], str]]) -> List[ContentRule]:
    out = []
    for needles, label in rows:
        if isinstance(needles, str):
            needles = (needles,)
        out.append(ContentRule(needles, category, label))
    return out

# -----------------------------------------------------------------------------
# PRESENCE TABLE
# -----------------------------------------------------------------------------

PYTHON_MARKERS = ("requirements.txt", "Pipfile", "pyproject.toml", "poetry.lock")
JAVA_MARKERS = ("pom.xml", "build.gradle", "build.gradle.kts")

_java = present(*JAVA_MARKERS)

PRESENCE_RULES: Tuple[PresenceRule, ...] = (
    # JavaScript / Node.js
    PresenceRule(present("package.json"), Category.LANGUAGES, "JavaScript"),
    PresenceRule(present("package.json"), Category.TOOLS, "Node.js"),
    PresenceRule(present("package.json"), Category.TOOLS, "NPM"),

    # Python
    PresenceRule(present(*PYTHON_MARKERS), Category.LANGUAGES, "Python"),

    # JVM
    PresenceRule(_java, Category.LANGUAGES, "Java"),
    PresenceRule(all_of(_java, present("gradlew")), Category.TOOLS, "Gradle"),
    PresenceRule(all_of(_java, absent(present("gradlew")), present("mvnw")), Category.TOOLS, "Maven"),
    PresenceRule(
        all_of(_java, any_of(present("build.gradle.kts"), file_suffix(".kt"))),
        Category.LANGUAGES,
        "Kotlin",
    ),

    # Other languages
    PresenceRule(present("go.mod"), Category.LANGUAGES, "Go"),
    PresenceRule(present("Cargo.toml"), Category.LANGUAGES, "Rust"),
    PresenceRule(present("composer.json"), Category.LANGUAGES, "PHP"),
    PresenceRule(present("Gemfile"), Category.LANGUAGES, "Ruby"),

    # Mobile
    PresenceRule(present("pubspec.yaml"), Category.LANGUAGES, "Dart"),
    PresenceRule(present("pubspec.yaml"), Category.FRONTEND, "Flutter"),
    PresenceRule(all_of(present("Podfile"), file_suffix(".swift")), Category.LANGUAGES, "Swift"),
    PresenceRule(all_of(present("Podfile"), file_suffix(".swift")), Category.FRONTEND, "iOS (Swift)"),

    # Infrastructure
    PresenceRule(present("Dockerfile", "docker-compose.yml"), Category.TOOLS, "Docker"),
    PresenceRule(present("kubernetes", "k8s", "helm"), Category.TOOLS, "Kubernetes"),
)

# -----------------------------------------------------------------------------
# CONTENT TABLES
# -----------------------------------------------------------------------------

_NODE_RULES: Tuple[ContentRule, ...] = tuple(
    _rules(Category.FRONTEND, [
        ("react", "React"),
        ("next", "Next.js"),
        ("vue", "Vue.js"),
        ("nuxt", "Nuxt.js"),
        ("svelte", "Svelte"),
        ("@sveltejs/kit", "SvelteKit"),
        (("angular", "@angular/core"), "Angular"),
        ("gatsby", "Gatsby"),
        ("astro", "Astro"),
        ("remix", "Remix"),
        (("redux", "@reduxjs/toolkit"), "Redux"),
        ("zustand", "Zustand"),
        ("recoil", "Recoil"),
        ("@tanstack/react-query", "TanStack Query"),
        ("tailwindcss", "Tailwind CSS"),
        ("bootstrap", "Bootstrap"),
        (("sass", "node-sass"), "Sass"),
        ("styled-components", "Styled Components"),
        ("@emotion/react", "Emotion"),
        ("@mui/material", "MUI"),
        ("framer-motion", "Framer Motion"),
        ("three", "Three.js"),
    ])
    + _rules(Category.BACKEND, [
        ("express", "Express.js"),
        (("nest", "@nestjs/core"), "NestJS"),
        ("fastify", "Fastify"),
        ("socket.io", "Socket.io"),
        ("graphql", "GraphQL"),
        (("apollo-server", "@apollo/server"), "Apollo"),
        ("trpc", "tRPC"),
        (("mongoose", "mongodb"), "MongoDB"),
        ("pg", "PostgreSQL"),
        ("mysql2", "MySQL"),
        ("prisma", "Prisma"),
        ("drizzle-orm", "Drizzle"),
        ("typeorm", "TypeORM"),
        ("sequelize", "Sequelize"),
        (("firebase", "firebase-admin"), "Firebase"),
        (("supabase", "@supabase/supabase-js"), "Supabase"),
        (("redis", "ioredis"), "Redis"),
    ])
    + _rules(Category.AI_ML, [
        ("@tensorflow/tfjs", "TensorFlow.js"),
        ("brain.js", "Brain.js"),
        ("openai", "OpenAI API"),
        ("langchain", "LangChain"),
    ])
    + _rules(Category.LANGUAGES, [
        ("typescript", "TypeScript"),
    ])
    + _rules(Category.TOOLS, [
        ("vite", "Vite"),
        ("webpack", "Webpack"),
        ("jest", "Jest"),
        ("vitest", "Vitest"),
        ("cypress", "Cypress"),
        ("playwright", "Playwright"),
        ("storybook", "Storybook"),
    ])
)

_PYTHON_RULES: Tuple[ContentRule, ...] = tuple(
    _rules(Category.BACKEND, [
        ("django", "Django"),
        ("flask", "Flask"),
        ("fastapi", "FastAPI"),
        ("sqlalchemy", "SQLAlchemy"),
        ("psycopg2", "PostgreSQL"),
        ("pymongo", "MongoDB"),
    ])
    + _rules(Category.FRONTEND, [
        ("streamlit", "Streamlit"),
    ])
    + _rules(Category.AI_ML, [
        (("torch", "pytorch"), "PyTorch"),
        (("tensorflow", "keras"), "TensorFlow/Keras"),
        (("scikit-learn", "sklearn"), "Scikit-learn"),
        ("pandas", "Pandas"),
        ("numpy", "NumPy"),
        ("matplotlib", "Matplotlib"),
        ("seaborn", "Seaborn"),
        (("opencv", "cv2"), "OpenCV"),
        ("nltk", "NLTK"),
        ("spacy", "Spacy"),
        (("transformers", "huggingface"), "Transformers (HuggingFace)"),
        ("scipy", "SciPy"),
    ])
    + _rules(Category.TOOLS, [
        ("jupyter", "Jupyter Notebooks"),
    ])
)

CONTENT_SOURCES: Tuple[ContentSource, ...] = (
    ContentSource(("package.json",), dependency_keys, _NODE_RULES),
    ContentSource(("requirements.txt",), plain_text, _PYTHON_RULES),
    ContentSource(("pom.xml", "build.gradle"), plain_text, tuple(_rules(Category.BACKEND, [
        ("spring-boot", "Spring Boot"),
        ("hibernate", "Hibernate"),
    ]))),
    ContentSource(("go.mod",), plain_text, tuple(_rules(Category.BACKEND, [
        ("gin-gonic", "Gin"),
        ("gofiber", "Fiber"),
        ("gorilla/mux", "Gorilla Mux"),
        ("gorm", "GORM"),
    ]))),
    ContentSource(("Cargo.toml",), plain_text, tuple(_rules(Category.BACKEND, [
        ("actix-web", "Actix Web"),
        ("rocket", "Rocket"),
        ("tokio", "Tokio"),
        ("diesel", "Diesel"),
        ("sqlx", "SQLx"),
    ]))),
    ContentSource(("composer.json",), plain_text, tuple(_rules(Category.BACKEND, [
        ("laravel", "Laravel"),
        ("symfony", "Symfony"),
    ]))),
    ContentSource(("Gemfile",), plain_text, tuple(_rules(Category.BACKEND, [
        ("rails", "Ruby on Rails"),
        ("sinatra", "Sinatra"),
    ]))),
)
