from models.accounts import Account
from models.counters import Counter
from models.journal_entry import JournalEntry
from models.journal_line import JournalLine
from models.journal_attachment import JournalAttachment
from models.users import User

__all__ = ['Account', 'Counter', 'JournalAttachment', 'JournalEntry', 'JournalLine', 'User',]
