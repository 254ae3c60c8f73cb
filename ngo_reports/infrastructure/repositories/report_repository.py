"""Persistence layer for monthly organization reports."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ngo_reports.domain.entities import Report
from ngo_reports.domain.exceptions import StoreError
from ngo_reports.infrastructure.models import ReportModel
from ngo_reports.utils import ensure_app_timezone, now_in_app_timezone


class ReportRepository:
    """Store reports keyed by ``(organization_id, month)``.

    Writes replace every counter of the existing report; the last write to
    complete wins.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def upsert_report(
        self,
        organization_id: str,
        month: str,
        people_helped: float,
        events_conducted: float,
        funds_utilized: float,
    ) -> Report:
        report = Report(
            organization_id=organization_id,
            month=month,
            people_helped=people_helped,
            events_conducted=events_conducted,
            funds_utilized=funds_utilized,
        )
        try:
            try:
                model = self._write(report)
            except IntegrityError:
                # Another writer created the key between our lookup and insert.
                self.session.rollback()
                model = self._write(report)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError(
                f"Could not save report for '{organization_id}' ({month})"
            ) from exc
        return self._to_entity(model)

    def get(self, organization_id: str, month: str) -> Report | None:
        try:
            model = self._find(organization_id, month)
        except SQLAlchemyError as exc:
            raise StoreError("Could not read reports") from exc
        return self._to_entity(model) if model else None

    def list_by_month(self, month: str) -> Sequence[Report]:
        stmt = (
            select(ReportModel)
            .where(ReportModel.month == month)
            .order_by(ReportModel.organization_id)
            .execution_options(populate_existing=True)
        )
        try:
            models = self.session.scalars(stmt).all()
        except SQLAlchemyError as exc:
            raise StoreError("Could not read reports") from exc
        return [self._to_entity(model) for model in models]

    def _find(self, organization_id: str, month: str) -> ReportModel | None:
        stmt = select(ReportModel).where(
            ReportModel.organization_id == organization_id,
            ReportModel.month == month,
        ).execution_options(populate_existing=True)
        return self.session.scalars(stmt).first()

    def _write(self, report: Report) -> ReportModel:
        model = self._find(report.organization_id, report.month)
        if model is None:
            model = ReportModel(
                organization_id=report.organization_id, month=report.month
            )
            self.session.add(model)
        model.people_helped = report.people_helped
        model.events_conducted = report.events_conducted
        model.funds_utilized = report.funds_utilized
        model.updated_at = now_in_app_timezone()
        self.session.commit()
        self.session.refresh(model)
        return model

    @staticmethod
    def _to_entity(model: ReportModel) -> Report:
        return Report(
            organization_id=model.organization_id,
            month=model.month,
            people_helped=model.people_helped,
            events_conducted=model.events_conducted,
            funds_utilized=model.funds_utilized,
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["ReportRepository"]
