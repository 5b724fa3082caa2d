from moodjournal.domains.journal.models.journal_entry import JournalEntry
from moodjournal.domains.journal.models.mood import Mood

__all__ = ["JournalEntry", "Mood"]
