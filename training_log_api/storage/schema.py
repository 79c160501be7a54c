"""PostgreSQL schema definitions for the training log collections."""

# Users table - registered identities, email is the login handle
CREATE_USERS_TABLE = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT NOT NULL,
    password TEXT NOT NULL,
    profile_picture TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

    CONSTRAINT users_email_key UNIQUE (email)
);

CREATE INDEX IF NOT EXISTS idx_users_created_at ON users(created_at);
"""

# Animals table - owner is a user id, not enforced as a foreign key
CREATE_ANIMALS_TABLE = """
CREATE TABLE IF NOT EXISTS animals (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    hours_trained DOUBLE PRECISION NOT NULL DEFAULT 0,
    owner TEXT NOT NULL,
    date_of_birth TIMESTAMPTZ,
    profile_picture TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

    CONSTRAINT animals_hours_trained_check CHECK (hours_trained >= 0)
);

CREATE INDEX IF NOT EXISTS idx_animals_owner ON animals(owner);
CREATE INDEX IF NOT EXISTS idx_animals_created_at ON animals(created_at);
"""

# Training logs table - references an animal and a user by id
CREATE_TRAINING_LOGS_TABLE = """
CREATE TABLE IF NOT EXISTS training_logs (
    id TEXT PRIMARY KEY,
    date TIMESTAMPTZ NOT NULL,
    description TEXT NOT NULL,
    hours DOUBLE PRECISION NOT NULL,
    animal TEXT NOT NULL,
    user_id TEXT NOT NULL,
    training_log_video TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),

    CONSTRAINT training_logs_hours_check CHECK (hours > 0)
);

CREATE INDEX IF NOT EXISTS idx_training_logs_animal ON training_logs(animal);
CREATE INDEX IF NOT EXISTS idx_training_logs_user_id ON training_logs(user_id);
CREATE INDEX IF NOT EXISTS idx_training_logs_created_at ON training_logs(created_at);
"""

# Complete schema initialization - executes in order
INIT_SCHEMA = f"""
{CREATE_USERS_TABLE}
{CREATE_ANIMALS_TABLE}
{CREATE_TRAINING_LOGS_TABLE}
"""

# Collections wiped by the maintenance clear script
COLLECTION_TABLES = ("training_logs", "animals", "users")
