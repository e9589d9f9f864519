"""
initial schema: lexicon, word of the day, baby names, users and learning,
admin content, translations, audit log

Revision ID: 20251001_initial_schema
Revises:
Create Date: 2025-10-01
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '20251001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

NOW = sa.text('CURRENT_TIMESTAMP')


def upgrade() -> None:
    op.create_table(
        'lexemes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('sanskrit', sa.String(), nullable=False),
        sa.Column('transliteration', sa.String(), nullable=True),
        sa.Column('primary_meaning', sa.Text(), nullable=False),
        sa.Column('english_meanings', sa.Text(), nullable=True),
        sa.Column('part_of_speech', sa.String(), nullable=True),
        sa.Column('hindi_meaning', sa.Text(), nullable=True),
        sa.Column('tags', sa.Text(), nullable=True),
        sa.Column('raw_entry', sa.Text(), nullable=True),
        sa.Column('baby_name_checked', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('baby_name_suitable', sa.Boolean(), nullable=True),
        sa.Column('baby_name_gender', sa.String(length=16), nullable=True),
        sa.Column('improved_translation', sa.Text(), nullable=True),
        sa.Column('example_phrase', sa.Text(), nullable=True),
        sa.Column('difficulty_level', sa.String(length=32), nullable=True),
        sa.Column('quiz_choices', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_lexemes_sanskrit', 'lexemes', ['sanskrit'])
    op.create_index('ix_lexemes_transliteration', 'lexemes', ['transliteration'])
    op.create_index('ix_lexemes_baby_name_checked', 'lexemes', ['baby_name_checked'])
    op.create_index('ix_lexemes_difficulty_level', 'lexemes', ['difficulty_level'])

    op.create_table(
        'word_of_day_state',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('lexeme_id', sa.Integer(), sa.ForeignKey('lexemes.id'), nullable=False),
        sa.Column('selected_at', sa.DateTime(), nullable=False),
    )
    op.create_table(
        'word_of_day_log',
        sa.Column('lexeme_id', sa.Integer(), sa.ForeignKey('lexemes.id'), primary_key=True),
        sa.Column('used_at', sa.DateTime(), server_default=NOW),
    )

    op.create_table(
        'baby_names',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('gender', sa.String(length=16), nullable=False),
        sa.Column('meaning', sa.Text(), nullable=True),
        sa.Column('pronunciation', sa.String(), nullable=True),
        sa.Column('story', sa.Text(), nullable=True),
        sa.Column('reasoning', sa.Text(), nullable=True),
        sa.Column('first_letter', sa.String(length=4), nullable=True),
        sa.Column('lexeme_id', sa.Integer(), sa.ForeignKey('lexemes.id'), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_baby_names_name', 'baby_names', ['name'])
    op.create_index('ix_baby_names_slug', 'baby_names', ['slug'], unique=True)
    op.create_index('ix_baby_names_gender', 'baby_names', ['gender'])
    op.create_index('ix_baby_names_first_letter', 'baby_names', ['first_letter'])
    op.create_index('ix_baby_names_lexeme_id', 'baby_names', ['lexeme_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('picture', sa.String(), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'])

    op.create_table(
        'learning_progress',
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), primary_key=True),
        sa.Column('words_studied', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('flashcards_reviewed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('quizzes_taken', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('quizzes_correct', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('current_difficulty', sa.String(length=32), nullable=False, server_default='beginner'),
        sa.Column('updated_at', sa.DateTime(), server_default=NOW),
    )
    op.create_table(
        'word_progress',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('baby_name_id', sa.Integer(), sa.ForeignKey('baby_names.id'), nullable=False),
        sa.Column('review_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('confidence_level', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_reviewed', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('user_id', 'baby_name_id', name='uq_word_progress_user_name'),
    )
    op.create_index('ix_word_progress_user_id', 'word_progress', ['user_id'])
    op.create_index('ix_word_progress_baby_name_id', 'word_progress', ['baby_name_id'])
    op.create_table(
        'quiz_attempts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('baby_name_id', sa.Integer(), sa.ForeignKey('baby_names.id'), nullable=False),
        sa.Column('correct', sa.Boolean(), nullable=False),
        sa.Column('difficulty', sa.String(length=32), nullable=True),
        sa.Column('response_time_ms', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_quiz_attempts_user_id', 'quiz_attempts', ['user_id'])
    op.create_index('ix_quiz_attempts_baby_name_id', 'quiz_attempts', ['baby_name_id'])

    op.create_table(
        'videos',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('slug', sa.String(length=320), nullable=False),
        sa.Column('youtube_url', sa.Text(), nullable=False),
        sa.Column('youtube_id', sa.String(length=32), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('category', sa.String(length=64), nullable=False, server_default='Other'),
        sa.Column('thumbnail_url', sa.Text(), nullable=True),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        sa.Column('created_by', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
        sa.Column('updated_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_videos_slug', 'videos', ['slug'], unique=True)
    op.create_index('ix_videos_youtube_id', 'videos', ['youtube_id'])

    op.create_table(
        'blog_posts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('slug', sa.String(length=320), nullable=False),
        sa.Column('content_markdown', sa.Text(), nullable=False, server_default=''),
        sa.Column('content_html', sa.Text(), nullable=True),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='draft'),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        sa.Column('author_id', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
        sa.Column('updated_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_blog_posts_slug', 'blog_posts', ['slug'], unique=True)
    op.create_index('ix_blog_posts_status', 'blog_posts', ['status'])

    op.create_table(
        'news_items',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('slug', sa.String(length=320), nullable=False),
        sa.Column('content_markdown', sa.Text(), nullable=False, server_default=''),
        sa.Column('content_html', sa.Text(), nullable=True),
        sa.Column('source_url', sa.Text(), nullable=True),
        sa.Column('source_name', sa.String(length=200), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='published'),
        sa.Column('published_at', sa.DateTime(), nullable=True),
        sa.Column('created_by', sa.String(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
        sa.Column('updated_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_news_items_slug', 'news_items', ['slug'], unique=True)
    op.create_index('ix_news_items_status', 'news_items', ['status'])

    op.create_table(
        'translation_keys',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('translation_key', sa.String(length=200), nullable=False),
        sa.Column('source_text', sa.Text(), nullable=False),
        sa.Column('context', sa.String(length=200), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_translation_keys_translation_key', 'translation_keys', ['translation_key'], unique=True)
    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('translation_key', sa.String(length=200), nullable=False),
        sa.Column('language_code', sa.String(length=16), nullable=False),
        sa.Column('source_text', sa.Text(), nullable=False),
        sa.Column('translated_text', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=NOW),
        sa.UniqueConstraint('translation_key', 'language_code', name='uq_translation_key_lang'),
    )
    op.create_index('ix_translations_translation_key', 'translations', ['translation_key'])
    op.create_index('ix_translations_language_code', 'translations', ['language_code'])

    op.create_table(
        'admin_audit_log',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('admin_user_id', sa.String(), nullable=False),
        sa.Column('action', sa.String(length=32), nullable=False),
        sa.Column('resource_type', sa.String(length=64), nullable=False),
        sa.Column('resource_id', sa.String(length=64), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=NOW),
    )
    op.create_index('ix_admin_audit_log_admin_user_id', 'admin_audit_log', ['admin_user_id'])
    op.create_index('ix_admin_audit_log_resource_type', 'admin_audit_log', ['resource_type'])
    op.create_index('ix_admin_audit_log_created_at', 'admin_audit_log', ['created_at'])


def downgrade() -> None:
    for table in (
        'admin_audit_log', 'translations', 'translation_keys', 'news_items', 'blog_posts',
        'videos', 'quiz_attempts', 'word_progress', 'learning_progress', 'users',
        'baby_names', 'word_of_day_log', 'word_of_day_state', 'lexemes',
    ):
        op.drop_table(table)
