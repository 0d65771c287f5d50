from __future__ import annotations

from app.extensions import db, get_datastore
from app.models import GasStation
from app.services.concurrency import lock_for_update, run_with_retry
from app.validation import NotFoundError


def create_station(*, name: str, address: str, city: str, state: str, zip_code: str) -> GasStation:
    get_datastore().require()

    def _op():
        station = GasStation(
            name=name,
            address=address,
            city=city,
            state=state,
            zip_code=zip_code,
        )
        db.session.add(station)
        db.session.commit()
        return station

    return run_with_retry(_op)


def update_station(station_id: str, **changes) -> GasStation:
    get_datastore().require()

    def _op():
        station = lock_for_update(db.session.query(GasStation).filter_by(id=station_id)).first()
        if not station:
            raise NotFoundError("Gas station not found")

        for key in ("name", "address", "city", "state", "zip_code"):
            if changes.get(key) is not None:
                setattr(station, key, changes[key])

        db.session.commit()
        return station

    return run_with_retry(_op)


def get_station(station_id: str) -> GasStation | None:
    if not get_datastore().ready:
        return None
    return db.session.query(GasStation).filter_by(id=station_id).first()


def require_station(station_id: str) -> GasStation:
    station = get_station(station_id)
    if not station:
        raise NotFoundError("Gas station not found")
    return station


def list_stations() -> list[GasStation]:
    if not get_datastore().ready:
        return []
    return db.session.query(GasStation).order_by(GasStation.created_at.desc(), GasStation.name.asc()).all()
