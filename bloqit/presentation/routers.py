from __future__ import annotations

from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from bloqit.core.errors import BloqitError, ErrorKind
from bloqit.schemas.models import (
    Bloq,
    BloqCreate,
    BloqUpdate,
    Locker,
    LockerOccupancy,
    LockerStatusUpdate,
    Rent,
    RentCreate,
    RentStatusUpdate,
)
from bloqit.services.facility_service import (
    create_bloq_service,
    create_locker_service,
    delete_locker_service,
    get_bloq_service,
    get_locker_occupancy_service,
    get_locker_service,
    get_lockers_by_bloq_service,
    list_bloqs_service,
    update_bloq_service,
    update_locker_status_service,
)
from bloqit.services.rent_service import (
    create_rent_service,
    get_rent_service,
    get_rents_by_locker_service,
    record_dropoff_service,
    record_pickup_service,
    update_rent_status_service,
)

router = APIRouter(prefix="/api")

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.VALIDATION: 422,
    ErrorKind.UNAVAILABLE: 503,
}


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def _http_error(e: BloqitError) -> HTTPException:
    return HTTPException(status_code=STATUS_BY_KIND[e.kind], detail=str(e))


# -----------------------------
# Bloqs
# -----------------------------
@router.post("/bloqs", response_model=Bloq, status_code=201)
def post_bloqs(body: BloqCreate, db: Session = Depends(get_db)) -> Bloq:
    try:
        return create_bloq_service(body, db)
    except BloqitError as e:
        raise _http_error(e)


@router.get("/bloqs", response_model=list[Bloq])
def get_bloqs(db: Session = Depends(get_db)) -> list[Bloq]:
    try:
        return list_bloqs_service(db)
    except BloqitError as e:
        raise _http_error(e)


@router.get("/bloqs/{bloq_id}", response_model=Bloq)
def get_bloqs_bloq_id(bloq_id: str, db: Session = Depends(get_db)) -> Bloq:
    try:
        return get_bloq_service(bloq_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.put("/bloqs/{bloq_id}", response_model=Bloq)
def put_bloqs_bloq_id(bloq_id: str, body: BloqUpdate, db: Session = Depends(get_db)) -> Bloq:
    try:
        return update_bloq_service(bloq_id, body, db)
    except BloqitError as e:
        raise _http_error(e)


# -----------------------------
# Lockers
# -----------------------------
@router.post("/lockers/bloq/{bloq_id}", response_model=Locker, status_code=201)
def post_lockers_bloq_bloq_id(bloq_id: str, db: Session = Depends(get_db)) -> Locker:
    """
    Create a CLOSED, unoccupied locker in the bloq
    """
    try:
        return create_locker_service(bloq_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.get("/lockers/bloq/{bloq_id}", response_model=list[Locker])
def get_lockers_bloq_bloq_id(bloq_id: str, db: Session = Depends(get_db)) -> list[Locker]:
    try:
        return get_lockers_by_bloq_service(bloq_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.get("/lockers/{locker_id}", response_model=Locker)
def get_lockers_locker_id(locker_id: str, db: Session = Depends(get_db)) -> Locker:
    try:
        return get_locker_service(locker_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.put("/lockers/{locker_id}/status", response_model=Locker)
def put_lockers_locker_id_status(
    locker_id: str,
    body: LockerStatusUpdate,
    db: Session = Depends(get_db),
) -> Locker:
    """
    Open or close the locker door (independent of occupancy)
    """
    try:
        return update_locker_status_service(locker_id, body, db)
    except BloqitError as e:
        raise _http_error(e)


@router.delete("/lockers/{locker_id}", status_code=204)
def delete_lockers_locker_id(locker_id: str, db: Session = Depends(get_db)) -> None:
    """
    Delete a free locker that never hosted a rent

    Returns:
      - 204 when the locker is gone
      - 404 if the locker does not exist
      - 409 if the locker is occupied or has rent history
    """
    try:
        delete_locker_service(locker_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.get("/lockers/{locker_id}/is-occupied", response_model=LockerOccupancy)
def get_lockers_locker_id_is_occupied(locker_id: str, db: Session = Depends(get_db)) -> LockerOccupancy:
    try:
        return get_locker_occupancy_service(locker_id, db)
    except BloqitError as e:
        raise _http_error(e)


# -----------------------------
# Rents
# -----------------------------
@router.post("/rents/locker/{locker_id}", response_model=Rent, status_code=201)
def post_rents_locker_locker_id(locker_id: str, body: RentCreate, db: Session = Depends(get_db)) -> Rent:
    """
    Create a rent in an unoccupied locker

    Returns:
      - 201 with the CREATED rent
      - 404 if the locker does not exist
      - 409 if the locker is already occupied
      - 422 on invalid weight or size
    """
    try:
        return create_rent_service(locker_id, body, db)
    except BloqitError as e:
        raise _http_error(e)


@router.get("/rents/locker/{locker_id}", response_model=list[Rent])
def get_rents_locker_locker_id(locker_id: str, db: Session = Depends(get_db)) -> list[Rent]:
    try:
        return get_rents_by_locker_service(locker_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.get("/rents/{rent_id}", response_model=Rent)
def get_rents_rent_id(rent_id: str, db: Session = Depends(get_db)) -> Rent:
    try:
        return get_rent_service(rent_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.put("/rents/{rent_id}/status", response_model=Rent)
def put_rents_rent_id_status(rent_id: str, body: RentStatusUpdate, db: Session = Depends(get_db)) -> Rent:
    """
    Administrative status override (any status; locker occupancy is kept in step)
    """
    try:
        return update_rent_status_service(rent_id, body, db)
    except BloqitError as e:
        raise _http_error(e)


@router.put("/rents/{rent_id}/dropoff", response_model=Rent)
def put_rents_rent_id_dropoff(rent_id: str, db: Session = Depends(get_db)) -> Rent:
    """
    Record the parcel dropoff: WAITING_DROPOFF -> WAITING_PICKUP

    Returns:
      - 200 with the updated rent
      - 404 if the rent does not exist
      - 409 if the rent is not WAITING_DROPOFF
    """
    try:
        return record_dropoff_service(rent_id, db)
    except BloqitError as e:
        raise _http_error(e)


@router.put("/rents/{rent_id}/pickup", response_model=Rent)
def put_rents_rent_id_pickup(rent_id: str, db: Session = Depends(get_db)) -> Rent:
    """
    Record the parcel pickup: WAITING_PICKUP -> DELIVERED, freeing the locker
    """
    try:
        return record_pickup_service(rent_id, db)
    except BloqitError as e:
        raise _http_error(e)
