# services/database_service.py
"""
Storage for processed medical reports.

Two backends with the same interface:
- MemoryReportStorage: process-local, used by default and in tests
- MySQLReportStorage: the medical_reports table on a MySQL database

REPORT_STORAGE=mysql selects the database; connection settings come from the
REPORTS_SQL_* environment variables.
"""

import json
import logging
import os
from datetime import datetime
from typing import Dict, List, Optional

import pymysql
from dotenv import load_dotenv

from models.medical_report import MedicalReport
from models.medical_term import MatchedTerm

load_dotenv()

logger = logging.getLogger(__name__)


class ReportStorageError(Exception):
    """Raised when a report can not be saved or read"""
    pass


class MemoryReportStorage:
    """Keeps reports in a dict, ids counting up from 1"""

    def __init__(self):
        self.reports: Dict[int, MedicalReport] = {}
        self.current_report_id = 1

    async def create_medical_report(self, report: MedicalReport) -> MedicalReport:
        report_id = self.current_report_id
        self.current_report_id += 1
        saved = report.model_copy(update={"id": report_id})
        self.reports[report_id] = saved
        logger.info(f"Saved report {report_id} in memory")
        return saved

    async def get_medical_report(self, report_id: int) -> Optional[MedicalReport]:
        return self.reports.get(report_id)

    async def get_medical_reports_by_user_id(self, user_id: int) -> List[MedicalReport]:
        return [report for report in self.reports.values() if report.user_id == user_id]


class MySQLReportStorage:
    """Handles report persistence on the medical_reports table"""

    def __init__(self):
        self.db_config = {
            'host': os.getenv("REPORTS_SQL_HOST"),
            'user': os.getenv("REPORTS_SQL_USER"),
            'password': os.getenv("REPORTS_SQL_PASSWORD"),
            'database': os.getenv("REPORTS_SQL_DATABASE"),
            'charset': 'utf8mb4'
        }

    def get_connection(self):
        """Create database connection"""
        try:
            return pymysql.connect(**self.db_config)
        except pymysql.Error as e:
            raise ReportStorageError(f"Could not connect to report database: {e}") from e

    async def create_medical_report(self, report: MedicalReport) -> MedicalReport:
        """Insert a processed report and return it with its new id"""
        conn = self.get_connection()
        try:
            with conn.cursor() as cursor:
                sql = """
                INSERT INTO medical_reports
                (user_id, original_text, simplified_text, identified_terms,
                 created_at, is_anonymized, language)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """
                cursor.execute(sql, (
                    report.user_id,
                    report.original_text,
                    report.simplified_text,
                    json.dumps([term.to_json() for term in report.identified_terms]),
                    report.created_at,
                    report.is_anonymized,
                    report.language
                ))
                report_id = cursor.lastrowid
            conn.commit()
            logger.info(f"Created medical report: {report_id}")
            return report.model_copy(update={"id": report_id})
        except pymysql.Error as e:
            conn.rollback()
            raise ReportStorageError(f"Could not save report: {e}") from e
        finally:
            conn.close()

    async def get_medical_report(self, report_id: int) -> Optional[MedicalReport]:
        """Get a report by id"""
        conn = self.get_connection()
        try:
            with conn.cursor(pymysql.cursors.DictCursor) as cursor:
                sql = "SELECT * FROM medical_reports WHERE id = %s"
                cursor.execute(sql, (report_id,))
                row = cursor.fetchone()
                return self._parse_report(row) if row else None
        except pymysql.Error as e:
            raise ReportStorageError(f"Could not load report {report_id}: {e}") from e
        finally:
            conn.close()

    async def get_medical_reports_by_user_id(self, user_id: int) -> List[MedicalReport]:
        """Get all reports saved for a user, oldest first"""
        conn = self.get_connection()
        try:
            with conn.cursor(pymysql.cursors.DictCursor) as cursor:
                sql = """
                SELECT * FROM medical_reports
                WHERE user_id = %s
                ORDER BY id ASC
                """
                cursor.execute(sql, (user_id,))
                return [self._parse_report(row) for row in cursor.fetchall()]
        except pymysql.Error as e:
            raise ReportStorageError(f"Could not load reports for user {user_id}: {e}") from e
        finally:
            conn.close()

    def _parse_report(self, row: Dict) -> MedicalReport:
        """Turn a database row back into a report"""
        terms = row.get("identified_terms") or "[]"
        if isinstance(terms, (str, bytes)):
            terms = json.loads(terms)

        created_at = row["created_at"]

        return MedicalReport(
            id=row["id"],
            user_id=row.get("user_id"),
            original_text=row["original_text"],
            simplified_text=row["simplified_text"],
            identified_terms=[MatchedTerm.model_validate(term) for term in terms],
            created_at=created_at.isoformat() if isinstance(created_at, datetime) else str(created_at),
            is_anonymized=bool(row.get("is_anonymized")),
            language=row.get("language") or "en"
        )


def get_report_storage():
    """Pick the storage backend named by REPORT_STORAGE"""
    backend = os.getenv("REPORT_STORAGE", "memory").strip().lower()
    if backend == "mysql":
        return MySQLReportStorage()
    if backend != "memory":
        logger.warning(f"Unknown REPORT_STORAGE '{backend}', using in-memory storage")
    return MemoryReportStorage()


# Global instance
report_storage = get_report_storage()
