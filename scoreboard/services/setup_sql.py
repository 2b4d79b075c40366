"""
Setup SQL
Statements an operator runs in the Supabase SQL editor to provision the
points table, the leaderboard view and the functions the service calls
"""

from dataclasses import dataclass
from typing import List

LEADERBOARD_VIEW = "profiles_with_points"
CREATE_POINTS_TABLE_RPC = "create_points_table_if_not_exists"
CREATE_VIEW_RPC = "create_profiles_with_points_view"
ADD_POINTS_RPC = "add_points_to_user"


@dataclass(frozen=True)
class SetupStatement:
    slug: str
    name: str
    sql: str


CREATE_POINTS_TABLE = """
CREATE TABLE IF NOT EXISTS points (
  user_id UUID REFERENCES auth.users(id) ON DELETE CASCADE,
  points INTEGER DEFAULT 0 NOT NULL,
  PRIMARY KEY (user_id)
);
"""

CREATE_POINTS_TABLE_FUNCTION = """
CREATE OR REPLACE FUNCTION create_points_table_if_not_exists()
RETURNS void AS $$
BEGIN
  CREATE TABLE IF NOT EXISTS points (
    user_id UUID REFERENCES auth.users(id) ON DELETE CASCADE,
    points INTEGER DEFAULT 0 NOT NULL,
    PRIMARY KEY (user_id)
  );
END;
$$ LANGUAGE plpgsql;
"""

CREATE_ADD_POINTS_FUNCTION = """
CREATE OR REPLACE FUNCTION add_points_to_user(user_uuid UUID, points_to_add INTEGER)
RETURNS void AS $$
BEGIN
  INSERT INTO points (user_id, points)
  VALUES (user_uuid, points_to_add)
  ON CONFLICT (user_id)
  DO UPDATE SET points = points.points + points_to_add;
END;
$$ LANGUAGE plpgsql;
"""

CREATE_PROFILES_WITH_POINTS_VIEW = """
CREATE OR REPLACE VIEW profiles_with_points AS
SELECT
  u.id,
  u.raw_user_meta_data->>'name' as name,
  COALESCE(p.points, 0) as points
FROM auth.users u
LEFT JOIN points p ON u.id = p.user_id;
"""

CREATE_PROFILES_VIEW_FUNCTION = """
CREATE OR REPLACE FUNCTION create_profiles_with_points_view()
RETURNS void AS $$
BEGIN
  CREATE OR REPLACE VIEW profiles_with_points AS
  SELECT
    u.id,
    u.raw_user_meta_data->>'name' as name,
    COALESCE(p.points, 0) as points
  FROM auth.users u
  LEFT JOIN points p ON u.id = p.user_id;
END;
$$ LANGUAGE plpgsql;
"""

GRANT_PRIVILEGES = """
GRANT USAGE ON SCHEMA public TO anon, authenticated, service_role;
GRANT SELECT ON profiles_with_points TO anon, authenticated, service_role;
GRANT ALL ON points TO anon, authenticated, service_role;
GRANT EXECUTE ON FUNCTION create_points_table_if_not_exists TO anon, authenticated, service_role;
GRANT EXECUTE ON FUNCTION create_profiles_with_points_view TO anon, authenticated, service_role;
GRANT EXECUTE ON FUNCTION add_points_to_user TO anon, authenticated, service_role;
"""

# Run order matters: the view needs the table, grants need everything
SETUP_STATEMENTS: List[SetupStatement] = [
    SetupStatement("create-points-table", "Create Points Table", CREATE_POINTS_TABLE),
    SetupStatement("create-points-table-function", "Create Points Table Function", CREATE_POINTS_TABLE_FUNCTION),
    SetupStatement("create-add-points-function", "Create Add Points Function", CREATE_ADD_POINTS_FUNCTION),
    SetupStatement("create-profiles-view", "Create Profiles View", CREATE_PROFILES_WITH_POINTS_VIEW),
    SetupStatement("create-profiles-view-function", "Create Profiles View Function", CREATE_PROFILES_VIEW_FUNCTION),
    SetupStatement("grant-privileges", "Grant Privileges", GRANT_PRIVILEGES),
]


def get_statement(slug: str) -> SetupStatement:
    """Look up a statement by slug, raising KeyError if unknown"""
    for statement in SETUP_STATEMENTS:
        if statement.slug == slug:
            return statement
    raise KeyError(slug)


def combined_script() -> str:
    """All statements in run order, each headed by its name"""
    parts = [f"-- {statement.name}\n{statement.sql.strip()}\n" for statement in SETUP_STATEMENTS]
    return "\n".join(parts)
