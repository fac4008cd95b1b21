from freshbox.db.session import SessionLocal


# Dependency to get DB
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

# Background tasks outlive the request session and open their own
def get_session_factory():
    return SessionLocal
