"""Test the FastAPI endpoints."""
import pytest
from httpx import ASGITransport, AsyncClient
from api.app import app

TURN = {
    "my_score": 0,
    "opponent_score": 0,
    "radar_cooldown": 0,
    "trap_cooldown": 0,
    "cells": [{"x": 3, "y": 2, "ore": 2, "hole": False}],
    "entities": [
        {"id": 0, "type": 0, "x": 0, "y": 1, "item": -1},
        {"id": 1, "type": 0, "x": 0, "y": 4, "item": -1},
        {"id": 2, "type": 1, "x": 9, "y": 4, "item": -1},
        {"id": 3, "type": 9, "x": 9, "y": 4, "item": -1},
    ],
}


def client() -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_start_game():
    """Test starting a new game."""
    async with client() as ac:
        response = await ac.post("/game/start", json={"width": 10, "height": 8, "seed": 123})
    assert response.status_code == 200
    assert response.json() == {"width": 10, "height": 8, "seed": 123}


@pytest.mark.asyncio
async def test_play_turn():
    """Each owned robot gets one command line."""
    async with client() as ac:
        await ac.post("/game/start", json={"width": 10, "height": 8, "seed": 42})
        response = await ac.post("/game/turn", json=TURN)

    assert response.status_code == 200
    data = response.json()
    assert data["turn"] == 1
    # robot 1 (y=4) takes the radar mission, robot 0 heads for the known ore
    assert data["actions"] == ["MOVE 3 2", "REQUEST RADAR"]


@pytest.mark.asyncio
async def test_get_state():
    """Test getting the agent's world model."""
    async with client() as ac:
        await ac.post("/game/start", json={"width": 10, "height": 8, "seed": 42})
        await ac.post("/game/turn", json=TURN)
        response = await ac.get("/game/state")

    assert response.status_code == 200
    data = response.json()
    assert data["turn"] == 1
    assert data["radar_holder"] == 1
    assert [r["id"] for r in data["robots"]] == [0, 1]
    assert data["robots"][0]["order"] == {"kind": "dig_at", "dest": [3, 2]}
    assert len(data["opponents"]) == 1
    assert len(data["board"]) == 8


@pytest.mark.asyncio
async def test_get_events():
    """Decode errors show up in the event stream instead of failing the turn."""
    async with client() as ac:
        await ac.post("/game/start", json={"width": 10, "height": 8, "seed": 42})
        await ac.post("/game/turn", json=TURN)
        response = await ac.get("/game/events?since=0")

    assert response.status_code == 200
    data = response.json()
    kinds = [e["kind"] for e in data["events"]]
    assert "DecodeError" in kinds
    assert "RadarAssigned" in kinds
    assert data["next_offset"] == len(data["events"])


@pytest.mark.asyncio
async def test_rejects_malformed_turn():
    async with client() as ac:
        await ac.post("/game/start", json={"width": 10, "height": 8})
        response = await ac.post("/game/turn", json={"my_score": -3})
    assert response.status_code == 422
