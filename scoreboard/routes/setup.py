"""
Setup SQL Routes
Statements to paste into the Supabase SQL editor
"""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from scoreboard.services.setup_sql import SETUP_STATEMENTS, get_statement, combined_script

router = APIRouter()


@router.get("/sql")
async def list_setup_sql():
    """List setup statements in the order they must run"""
    return {
        "statements": [
            {"slug": s.slug, "name": s.name, "sql": s.sql.strip()}
            for s in SETUP_STATEMENTS
        ]
    }


@router.get("/sql/script", response_class=PlainTextResponse)
async def get_setup_script():
    return combined_script()


@router.get("/sql/{slug}", response_class=PlainTextResponse)
async def get_setup_statement(slug: str):
    try:
        statement = get_statement(slug)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown setup statement: {slug}"
        )
    return statement.sql.strip() + "\n"
