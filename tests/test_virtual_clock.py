import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_read_virtual_date(client: AsyncClient, student_headers):
    response = await client.get("/api/virtualclock", headers=student_headers)

    assert response.status_code == 200
    assert response.json() == {"date": "2024-01-20"}


@pytest.mark.asyncio
async def test_move_forward(client: AsyncClient, student_headers):
    response = await client.put("/api/virtualclock", json={"date": "2024-07-01"}, headers=student_headers)

    assert response.status_code == 200
    assert response.json() == {"date": "2024-07-01"}
    assert (await client.get("/api/virtualclock", headers=student_headers)).json() == {"date": "2024-07-01"}


@pytest.mark.asyncio
@pytest.mark.parametrize("new_date", ["2024-01-19", "2024-01-20"])
async def test_cannot_go_back(client: AsyncClient, student_headers, new_date):
    response = await client.put("/api/virtualclock", json={"date": new_date}, headers=student_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "New virtual date can't be before the current one!"}


@pytest.mark.asyncio
async def test_moving_clock_expires_proposals(client: AsyncClient, proposal, student_headers):
    assert len((await client.get("/api/proposals", headers=student_headers)).json()) == 1

    await client.put("/api/virtualclock", json={"date": "2024-07-01"}, headers=student_headers)

    assert (await client.get("/api/proposals", headers=student_headers)).json() == []
