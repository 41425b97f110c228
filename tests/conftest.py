"""Shared paint-model fixtures for command manager tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pytest

from undonete import (
    CommandHandler,
    CommandRegistry,
    LinearCommandManager,
    failure,
    no_effect,
    success,
)


@dataclass(frozen=True)
class Rectangle:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Circle:
    x: int
    y: int
    radius: int


@dataclass
class PaintModel:
    color: str = "black"
    rectangles: List[Rectangle] = field(default_factory=list)
    circles: List[Circle] = field(default_factory=list)


def _add_rectangle(model, instruction):
    model.rectangles.append(instruction["rectangle_to_add"])
    return success()


def _add_rectangle_with_result(model, instruction):
    model.rectangles.append(instruction["rectangle_to_add"])
    return success({"added_id": len(model.rectangles) - 1})


def _set_color(model, instruction):
    new_color = instruction["color"]
    if not new_color:
        return failure("Color must not be empty")
    if new_color == model.color:
        return no_effect(model.color)
    previous = model.color
    model.color = new_color
    return success(previous)


add_rectangle = CommandHandler(
    execute=_add_rectangle,
    undo=lambda params: params.model.rectangles.pop(),
    redo=lambda params: params.model.rectangles.append(params.instruction["rectangle_to_add"]),
)

add_rectangle_with_result = CommandHandler(
    execute=_add_rectangle_with_result,
    undo=lambda params: params.model.rectangles.pop(params.execution_result["added_id"]),
    redo=lambda params: params.model.rectangles.insert(
        params.execution_result["added_id"], params.instruction["rectangle_to_add"]
    ),
)


def _add_circle(model, instruction):
    model.circles.append(instruction["circle_to_add"])
    return success()


add_circle = {
    "execute": _add_circle,
    "undo": lambda params: params.model.circles.pop(),
    "redo": lambda params: params.model.circles.append(params.instruction["circle_to_add"]),
}


def _restore_color(params):
    params.model.color = params.execution_result


def _reapply_color(params):
    params.model.color = params.instruction["color"]


set_color = CommandHandler(execute=_set_color, undo=_restore_color, redo=_reapply_color)


@pytest.fixture
def registry() -> CommandRegistry:
    return CommandRegistry(
        addRectangle=add_rectangle,
        addRectangleWithResult=add_rectangle_with_result,
        addCircle=add_circle,
        setColor=set_color,
    )


@pytest.fixture
def manager(registry) -> LinearCommandManager:
    return LinearCommandManager(registry)


@pytest.fixture
def model() -> PaintModel:
    return PaintModel()


@pytest.fixture
def rect1() -> Rectangle:
    return Rectangle(100, 100, 50, 50)


@pytest.fixture
def rect2() -> Rectangle:
    return Rectangle(200, 200, 30, 30)


@pytest.fixture
def circle1() -> Circle:
    return Circle(75, 75, 10)
