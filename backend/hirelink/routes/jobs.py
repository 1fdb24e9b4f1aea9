from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from hirelink.auth.identity import VerifiedIdentity
from hirelink.core.database import StoreError, get_db
from hirelink.dependencies.auth import require_identity
from hirelink.schemas.job import JobCreate, JobCreatedOut, JobOut
from hirelink.services.jobs import (
    JobQuery,
    JobValidationError,
    all_jobs_window,
    latest_jobs_window,
)

router = APIRouter(tags=["jobs"])


@router.post("/add-job", response_model=JobCreatedOut, status_code=status.HTTP_201_CREATED)
def add_job(
    payload: JobCreate,
    identity: VerifiedIdentity = Depends(require_identity),
    db: Session = Depends(get_db),
):
    try:
        job = JobQuery(db).create_job(
            payload.title,
            payload.description,
            payload.link,
            posted_by=identity.subject,
        )
    except JobValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"message": "Job added successfully!", "job": JobOut.model_validate(job)}


@router.get("/all-jobs", response_model=list[JobOut])
def all_jobs(db: Session = Depends(get_db)):
    try:
        return JobQuery(db).list_jobs(all_jobs_window())
    except StoreError:
        raise HTTPException(status_code=500, detail="Error fetching jobs")


@router.get("/latest-jobs", response_model=list[JobOut])
def latest_jobs(db: Session = Depends(get_db)):
    try:
        return JobQuery(db).list_jobs(latest_jobs_window())
    except StoreError:
        raise HTTPException(status_code=500, detail="Error fetching latest jobs")
