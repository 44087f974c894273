"""Database engine, session registry and schema helpers."""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base

Base = declarative_base()

# Set by init_db()
engine = None
db_session = None


def init_db(app):
    """Create the engine and the thread-local session registry for an app."""
    global engine, db_session

    engine = create_engine(
        app.config['SQLALCHEMY_DATABASE_URI'],
        echo=app.config.get('SQLALCHEMY_ECHO', False),
        **app.config.get('SQLALCHEMY_ENGINE_OPTIONS', {})
    )

    # Committed objects keep their loaded attributes
    db_session = scoped_session(
        sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)
    )

    @app.teardown_appcontext
    def shutdown_session(exception=None):
        """Roll back on error and release the request's session."""
        if exception:
            db_session.rollback()
        db_session.remove()


def create_all():
    """Create every billing table."""
    import billing.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def drop_all():
    import billing.models  # noqa: F401
    Base.metadata.drop_all(bind=engine)


def ping(session) -> bool:
    """True when the database answers a trivial query."""
    return session.execute(text("SELECT 1")).scalar() == 1


def get_session():
    """The scoped session for the current thread."""
    return db_session
