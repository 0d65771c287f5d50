"""gasStations.* and employees.* procedures."""

from conftest import error_code, result


STATION = {
    "name": "Lakeside Gas",
    "address": "12 Shore Rd",
    "city": "Madison",
    "state": "WI",
    "zipCode": "53703",
}


class TestGasStations:
    def test_create_then_list_contains_station(self, user_rpc):
        created = result(user_rpc.mutate("gasStations.create", STATION))
        assert created["id"]
        assert created["zipCode"] == "53703"

        listed = result(user_rpc.query("gasStations.list"))
        match = [s for s in listed if s["id"] == created["id"]]
        assert len(match) == 1
        for key, value in STATION.items():
            assert match[0][key] == value

    def test_ids_are_unique(self, user_rpc):
        first = result(user_rpc.mutate("gasStations.create", STATION))
        second = result(user_rpc.mutate("gasStations.create", STATION))
        assert first["id"] != second["id"]

    def test_get_by_id(self, user_rpc, station):
        data = result(user_rpc.query("gasStations.getById", {"id": station.id}))
        assert data["name"] == "Main Street Fuel"

        response = user_rpc.query("gasStations.getById", {"id": "missing"})
        assert response.status_code == 404

    def test_partial_update(self, user_rpc, station):
        data = result(user_rpc.mutate("gasStations.update", {"id": station.id, "city": "Decatur"}))
        assert data["city"] == "Decatur"
        assert data["name"] == "Main Street Fuel"

    def test_update_missing_station(self, user_rpc):
        response = user_rpc.mutate("gasStations.update", {"id": "missing", "name": "X"})
        assert error_code(response) == "NOT_FOUND"


class TestEmployees:
    def test_create_with_multiple_stations(self, user_rpc, station, other_station):
        data = result(user_rpc.mutate("employees.create", {
            "firstName": "Sam",
            "lastName": "Ortiz",
            "role": "attendant",
            "stationIds": [station.id, other_station.id],
            "phoneNumber": "555-0100",
        }))
        assert data["stationIds"] == [station.id, other_station.id]
        assert data["isActive"] is True
        assert data["profilePictureUrl"] is None
        assert data["idDocuments"] == []

        for sid in (station.id, other_station.id):
            names = [e["firstName"] for e in result(user_rpc.query("employees.byStation", {"stationId": sid}))]
            assert names == ["Sam"]

    def test_create_requires_known_station(self, user_rpc):
        response = user_rpc.mutate("employees.create", {
            "firstName": "Sam", "lastName": "Ortiz", "role": "cashier", "stationIds": ["nope"],
        })
        assert response.status_code == 404

    def test_create_rejects_unknown_role(self, user_rpc, station):
        response = user_rpc.mutate("employees.create", {
            "firstName": "Sam", "lastName": "Ortiz", "role": "owner", "stationIds": [station.id],
        })
        assert response.status_code == 400

    def test_duplicate_email(self, user_rpc, employee, station):
        response = user_rpc.mutate("employees.create", {
            "firstName": "Other", "lastName": "Person", "role": "cashier",
            "stationIds": [station.id], "email": "DANA@example.com",
        })
        assert error_code(response) == "CONFLICT"

    def test_update_toggles_active_and_replaces_stations(self, user_rpc, employee, station, other_station):
        data = result(user_rpc.mutate("employees.update", {
            "id": employee.id,
            "isActive": False,
            "stationIds": [other_station.id],
        }))
        assert data["isActive"] is False
        assert data["stationIds"] == [other_station.id]
        assert data["firstName"] == "Dana"

        assert result(user_rpc.query("employees.byStation", {"stationId": station.id})) == []

    def test_update_can_clear_email(self, user_rpc, employee):
        data = result(user_rpc.mutate("employees.update", {"id": employee.id, "email": None}))
        assert data["email"] is None

    def test_get_and_list(self, user_rpc, employee):
        assert result(user_rpc.query("employees.getById", {"id": employee.id}))["lastName"] == "Reyes"
        assert [e["id"] for e in result(user_rpc.query("employees.list"))] == [employee.id]
        assert user_rpc.query("employees.getById", {"id": "missing"}).status_code == 404
