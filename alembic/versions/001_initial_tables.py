"""Initial tables

Revision ID: 001
Revises:
Create Date: 2025-09-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Teams (no unique index on name/season, writes use the fallback resolver)
    op.create_table(
        'teams',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('division', sa.String(length=20), nullable=True),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_teams_name_season', 'teams', ['name', 'season'])

    # Players
    op.create_table(
        'players',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'team_id', 'season', name='uq_players_name_team_season')
    )
    op.create_index('ix_players_team_id', 'players', ['team_id'])

    # Matchdays
    op.create_table(
        'matchdays',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('round', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('round', 'season', name='uq_matchdays_round_season')
    )
    op.create_index('ix_matchdays_season', 'matchdays', ['season'])

    # Matches
    op.create_table(
        'matches',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('matchday_id', sa.Integer(), nullable=False),
        sa.Column('home_team_id', sa.Integer(), nullable=False),
        sa.Column('away_team_id', sa.Integer(), nullable=False),
        sa.Column('home_sets', sa.Integer(), nullable=True),
        sa.Column('away_sets', sa.Integer(), nullable=True),
        sa.Column('home_legs', sa.Integer(), nullable=True),
        sa.Column('away_legs', sa.Integer(), nullable=True),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['matchday_id'], ['matchdays.id'], ),
        sa.ForeignKeyConstraint(['home_team_id'], ['teams.id'], ),
        sa.ForeignKeyConstraint(['away_team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'matchday_id', 'home_team_id', 'away_team_id', name='uq_matches_matchday_home_away'
        )
    )
    op.create_index('ix_matches_matchday_id', 'matches', ['matchday_id'])
    op.create_index('ix_matches_season', 'matches', ['season'])

    # Singles games
    op.create_table(
        'singles_games',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('match_id', sa.Integer(), nullable=False),
        sa.Column('home_player_id', sa.Integer(), nullable=False),
        sa.Column('away_player_id', sa.Integer(), nullable=False),
        sa.Column('home_score', sa.Integer(), nullable=True),
        sa.Column('away_score', sa.Integer(), nullable=True),
        sa.Column('home_average', sa.Float(), nullable=True),
        sa.Column('away_average', sa.Float(), nullable=True),
        sa.Column('home_checkouts', sa.Text(), nullable=True),
        sa.Column('away_checkouts', sa.Text(), nullable=True),
        sa.Column('game_order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['match_id'], ['matches.id'], ),
        sa.ForeignKeyConstraint(['home_player_id'], ['players.id'], ),
        sa.ForeignKeyConstraint(['away_player_id'], ['players.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_singles_games_match_id', 'singles_games', ['match_id'])

    # Doubles games
    op.create_table(
        'doubles_games',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('match_id', sa.Integer(), nullable=False),
        sa.Column('home_player1_id', sa.Integer(), nullable=False),
        sa.Column('home_player2_id', sa.Integer(), nullable=False),
        sa.Column('away_player1_id', sa.Integer(), nullable=False),
        sa.Column('away_player2_id', sa.Integer(), nullable=False),
        sa.Column('home_score', sa.Integer(), nullable=True),
        sa.Column('away_score', sa.Integer(), nullable=True),
        sa.Column('game_order', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['match_id'], ['matches.id'], ),
        sa.ForeignKeyConstraint(['home_player1_id'], ['players.id'], ),
        sa.ForeignKeyConstraint(['home_player2_id'], ['players.id'], ),
        sa.ForeignKeyConstraint(['away_player1_id'], ['players.id'], ),
        sa.ForeignKeyConstraint(['away_player2_id'], ['players.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_doubles_games_match_id', 'doubles_games', ['match_id'])

    # Team averages
    op.create_table(
        'team_averages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('average', sa.Float(), nullable=True),
        sa.Column('singles_won', sa.Integer(), nullable=False),
        sa.Column('singles_lost', sa.Integer(), nullable=False),
        sa.Column('doubles_won', sa.Integer(), nullable=False),
        sa.Column('doubles_lost', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('team_id', 'season', name='uq_team_averages_team_season')
    )

    # Player statistics
    op.create_table(
        'player_statistics',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('player_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('average', sa.Float(), nullable=True),
        sa.Column('singles_won', sa.Integer(), nullable=False),
        sa.Column('singles_lost', sa.Integer(), nullable=False),
        sa.Column('singles_percentage', sa.Float(), nullable=True),
        sa.Column('doubles_won', sa.Integer(), nullable=False),
        sa.Column('doubles_lost', sa.Integer(), nullable=False),
        sa.Column('doubles_percentage', sa.Float(), nullable=True),
        sa.Column('combined_percentage', sa.Float(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('player_id', 'season', name='uq_player_statistics_player_season')
    )

    # League standings
    op.create_table(
        'league_standings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('played', sa.Integer(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('legs_for', sa.Integer(), nullable=False),
        sa.Column('legs_against', sa.Integer(), nullable=False),
        sa.Column('goal_diff', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('team_id', 'season', name='uq_league_standings_team_season')
    )

    # Future schedule
    op.create_table(
        'future_schedule',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('round', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('home_team_id', sa.Integer(), nullable=False),
        sa.Column('away_team_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(['home_team_id'], ['teams.id'], ),
        sa.ForeignKeyConstraint(['away_team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'round', 'home_team_id', 'away_team_id', 'season',
            name='uq_future_schedule_round_home_away_season'
        )
    )
    op.create_index('ix_future_schedule_season', 'future_schedule', ['season'])

    # 180s
    op.create_table(
        'one_eighties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('player_id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('player_id', 'season', name='uq_one_eighties_player_season')
    )

    # High finishes
    op.create_table(
        'high_finishes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('player_id', sa.Integer(), nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('finish', sa.Integer(), nullable=False),
        sa.Column('count', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['player_id'], ['players.id'], ),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_high_finishes_player_id', 'high_finishes', ['player_id'])

    # Club venues
    op.create_table(
        'club_venues',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('team_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('zipcode', sa.String(length=20), nullable=True),
        sa.ForeignKeyConstraint(['team_id'], ['teams.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('team_id', name='uq_club_venues_team')
    )

    # Sync logs
    op.create_table(
        'sync_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('sync_type', sa.String(length=20), nullable=False),
        sa.Column('season', sa.String(length=20), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('records_updated', sa.Integer(), nullable=False),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )


def downgrade() -> None:
    op.drop_table('sync_logs')
    op.drop_table('club_venues')
    op.drop_index('ix_high_finishes_player_id')
    op.drop_table('high_finishes')
    op.drop_table('one_eighties')
    op.drop_index('ix_future_schedule_season')
    op.drop_table('future_schedule')
    op.drop_table('league_standings')
    op.drop_table('player_statistics')
    op.drop_table('team_averages')
    op.drop_index('ix_doubles_games_match_id')
    op.drop_table('doubles_games')
    op.drop_index('ix_singles_games_match_id')
    op.drop_table('singles_games')
    op.drop_index('ix_matches_season')
    op.drop_index('ix_matches_matchday_id')
    op.drop_table('matches')
    op.drop_index('ix_matchdays_season')
    op.drop_table('matchdays')
    op.drop_index('ix_players_team_id')
    op.drop_table('players')
    op.drop_index('ix_teams_name_season')
    op.drop_table('teams')
