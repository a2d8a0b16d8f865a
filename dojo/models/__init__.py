from dojo.core.database import Base, engine

# Import all models here to ensure they are registered with Base
from .participant import Participant
from .tournament import Tournament
from .entry import TournamentEntry
from .match import Match

def init_db(bind=engine):
    # Tables only; there is no migration tool behind this service.
    Base.metadata.create_all(bind=bind)
