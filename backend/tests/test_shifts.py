"""Shift lifecycle and closing reports."""

import pytest

from app.services import employee_service

from conftest import error_code, result


REPORT_AMOUNTS = {
    "totalSales": 150_000,
    "totalTax": 9_000,
    "cashAmount": 40_000,
    "creditAmount": 80_000,
    "debitAmount": 20_000,
    "mobileAmount": 10_000,
    "overShortAmount": -250,
    "fuelSales": 110_000,
    "grocerySales": 40_000,
}


def start(rpc, station, employee, **extra):
    return rpc.mutate("shifts.create", {"stationId": station.id, "employeeId": employee.id, **extra})


class TestShiftLifecycle:
    def test_start_then_end(self, user_rpc, station, employee):
        shift = result(start(user_rpc, station, employee, startTime="2026-03-02T08:00:00Z"))
        assert shift["endTime"] is None
        assert shift["status"] == "open"
        assert shift["startTime"] == "2026-03-02T08:00:00Z"

        active = result(user_rpc.query("shifts.active"))
        assert [s["id"] for s in active] == [shift["id"]]

        ended = result(user_rpc.mutate("shifts.end", {"id": shift["id"], "endTime": "2026-03-02T16:30:00Z"}))
        assert ended["endTime"] == "2026-03-02T16:30:00Z"
        assert ended["status"] == "closed"

        assert result(user_rpc.query("shifts.active")) == []

    def test_end_defaults_to_now(self, user_rpc, station, employee):
        shift = result(start(user_rpc, station, employee))
        ended = result(user_rpc.mutate("shifts.end", {"id": shift["id"]}))
        assert ended["endTime"] is not None

    def test_second_open_shift_for_employee_conflicts(self, user_rpc, station, employee):
        result(start(user_rpc, station, employee))
        response = start(user_rpc, station, employee)
        assert response.status_code == 409

    def test_shift_ends_only_once(self, user_rpc, station, employee):
        shift = result(start(user_rpc, station, employee))
        result(user_rpc.mutate("shifts.end", {"id": shift["id"]}))
        response = user_rpc.mutate("shifts.end", {"id": shift["id"]})
        assert error_code(response) == "CONFLICT"

    def test_end_before_start_rejected(self, user_rpc, station, employee):
        shift = result(start(user_rpc, station, employee, startTime="2026-03-02T08:00:00Z"))
        response = user_rpc.mutate("shifts.end", {"id": shift["id"], "endTime": "2026-03-02T07:00:00Z"})
        assert error_code(response) == "BAD_REQUEST"
        assert result(user_rpc.query("shifts.getById", {"id": shift["id"]}))["endTime"] is None

    def test_inactive_employee_cannot_start(self, user_rpc, station, employee):
        employee_service.update_employee(employee.id, is_active=False)
        assert start(user_rpc, station, employee).status_code == 400

    def test_active_filtered_by_station(self, user_rpc, station, other_station, employee):
        result(start(user_rpc, station, employee))
        assert len(result(user_rpc.query("shifts.active", {"stationId": station.id}))) == 1
        assert result(user_rpc.query("shifts.active", {"stationId": other_station.id})) == []

    def test_by_date_range_includes_whole_end_day(self, user_rpc, station, employee):
        shift = result(start(user_rpc, station, employee, startTime="2026-03-31T22:15:00Z"))
        in_range = result(user_rpc.query("shifts.byDateRange", {
            "stationId": station.id, "startDate": "2026-03-01", "endDate": "2026-03-31",
        }))
        assert [s["id"] for s in in_range] == [shift["id"]]

        out_of_range = result(user_rpc.query("shifts.byDateRange", {
            "stationId": station.id, "startDate": "2026-04-01", "endDate": "2026-04-30",
        }))
        assert out_of_range == []

    def test_by_date_range_rejects_inverted_range(self, user_rpc, station):
        response = user_rpc.query("shifts.byDateRange", {
            "stationId": station.id, "startDate": "2026-04-02", "endDate": "2026-04-01",
        })
        assert response.status_code == 400

    def test_unknown_shift(self, user_rpc):
        assert user_rpc.query("shifts.getById", {"id": "missing"}).status_code == 404
        assert user_rpc.mutate("shifts.end", {"id": "missing"}).status_code == 404


class TestClosingReports:
    @pytest.fixture
    def shift(self, user_rpc, station, employee):
        shift = result(start(user_rpc, station, employee, startTime="2026-03-05T06:00:00Z"))
        return result(user_rpc.mutate("shifts.end", {"id": shift["id"], "endTime": "2026-03-05T14:00:00Z"}))

    def test_create_report(self, user_rpc, shift):
        report = result(user_rpc.mutate("shiftReports.create", {
            "shiftId": shift["id"], "stationNumber": 3, "notes": "Drawer short", **REPORT_AMOUNTS,
        }))
        assert report["status"] == "pending"
        assert report["overShortAmount"] == -250
        assert report["totalSales"] == 150_000
        assert report["stationNumber"] == 3

        by_shift = result(user_rpc.query("shiftReports.byShift", {"shiftId": shift["id"]}))
        assert [r["id"] for r in by_shift] == [report["id"]]

    def test_one_report_per_shift(self, user_rpc, shift):
        result(user_rpc.mutate("shiftReports.create", {"shiftId": shift["id"], **REPORT_AMOUNTS}))
        response = user_rpc.mutate("shiftReports.create", {"shiftId": shift["id"], **REPORT_AMOUNTS})
        assert error_code(response) == "CONFLICT"

    def test_amounts_are_required_and_non_negative(self, user_rpc, shift):
        missing = {k: v for k, v in REPORT_AMOUNTS.items() if k != "totalTax"}
        assert user_rpc.mutate("shiftReports.create", {"shiftId": shift["id"], **missing}).status_code == 400

        negative = {**REPORT_AMOUNTS, "cashAmount": -1}
        assert user_rpc.mutate("shiftReports.create", {"shiftId": shift["id"], **negative}).status_code == 400

    def test_report_for_unknown_shift(self, user_rpc):
        response = user_rpc.mutate("shiftReports.create", {"shiftId": "missing", **REPORT_AMOUNTS})
        assert response.status_code == 404

    def test_update_status_records_reviewer(self, user_rpc, regular_user, shift):
        report = result(user_rpc.mutate("shiftReports.create", {"shiftId": shift["id"], **REPORT_AMOUNTS}))

        approved = result(user_rpc.mutate("shiftReports.updateStatus", {"id": report["id"], "status": "approved"}))
        assert approved["status"] == "approved"
        assert approved["reviewedByUserId"] == regular_user.id
        assert approved["reviewedAt"] is not None

        reopened = result(user_rpc.mutate("shiftReports.updateStatus", {"id": report["id"], "status": "pending"}))
        assert reopened["reviewedByUserId"] is None

        assert user_rpc.mutate("shiftReports.updateStatus", {"id": report["id"], "status": "lost"}).status_code == 400

    def test_by_date_range_joins_shift(self, user_rpc, station, shift):
        result(user_rpc.mutate("shiftReports.create", {"shiftId": shift["id"], **REPORT_AMOUNTS}))
        rows = result(user_rpc.query("shiftReports.byDateRange", {
            "stationId": station.id, "startDate": "2026-03-05", "endDate": "2026-03-05",
        }))
        assert len(rows) == 1
        assert rows[0]["shift"]["id"] == shift["id"]
        assert rows[0]["shift"]["employeeId"] == shift["employeeId"]
