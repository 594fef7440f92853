"""
Test data factories for generating test objects.

This module provides Factory Boy factories that build ORM instances with
realistic default values, plus payload factories for the HTTP API. Model
factories only build; ``persist`` adds and commits them on an async session.
"""

from datetime import date, timedelta

import factory

from models import Message, Project, ProjectItem, Tile, Todo


class TodoFactory(factory.Factory):
    """Factory for building Todo instances."""

    class Meta:
        model = Todo

    title = factory.Faker("sentence", nb_words=4, variable_nb_words=True)
    assignee = factory.Iterator(["coby", "rodion"])
    created_by = "coby"
    completed = False
    due_date = None


class TileFactory(factory.Factory):
    """Factory for building Tile instances."""

    class Meta:
        model = Tile

    type = factory.Iterator(["news", "weather", "note"])
    content = factory.LazyFunction(lambda: {"headline": "Something happened"})
    source = "agent"
    tags = factory.LazyFunction(list)
    reactions = factory.LazyFunction(list)
    read = False
    starred = False
    archived = False
    pinned = False
    saved_for_later = False


class ProjectFactory(factory.Factory):
    class Meta:
        model = Project

    name = factory.Sequence(lambda n: f"Test Project {n}")
    description = factory.Faker("text", max_nb_chars=200)
    status = "active"


class ProjectItemFactory(factory.Factory):
    class Meta:
        model = ProjectItem

    title = factory.Faker("sentence", nb_words=3)
    acceptance_criteria = factory.LazyFunction(list)
    status = "backlog"
    priority = 3
    assignee = "coby"
    # project_id will be passed when building


class MessageFactory(factory.Factory):
    class Meta:
        model = Message

    role = "user"
    content = factory.Faker("sentence")


class TodoPayloadFactory(factory.DictFactory):
    """JSON body for ``POST /api/todos``."""

    title = factory.Faker("sentence", nb_words=4)
    assignee = "rodion"
    createdBy = "rodion"
    dueDate = factory.LazyFunction(lambda: (date.today() + timedelta(days=3)).isoformat())


class TilePayloadFactory(factory.DictFactory):
    type = "news"
    content = factory.LazyFunction(lambda: {"headline": "Launch day", "url": "https://example.com"})
    source = "agent"
    tags = factory.LazyFunction(lambda: ["launch"])


class ProjectPayloadFactory(factory.DictFactory):
    name = factory.Sequence(lambda n: f"Project {n}")
    description = factory.Faker("sentence")


class ItemPayloadFactory(factory.DictFactory):
    title = factory.Faker("sentence", nb_words=3)
    acceptanceCriteria = factory.LazyFunction(lambda: ["it works"])
    priority = 2


async def persist(session, *instances):
    """Add and commit built instances, returning them refreshed."""
    session.add_all(instances)
    await session.commit()
    for instance in instances:
        await session.refresh(instance)
    return instances[0] if len(instances) == 1 else list(instances)
