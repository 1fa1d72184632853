"""
Central Signal Registry for Event-Driven Architecture.

Uses Flask's built-in blinker integration so that the quiz store can notify
other parts of the application without importing them.

Usage:
    # Publisher (sender)
    from brainboost_app.core.signals import answer_submitted
    answer_submitted.send(store, question_id=..., correct=True, score=100)

    # Subscriber (receiver)
    @answer_submitted.connect
    def on_answer_submitted(sender, **kwargs):
        ...
"""
from blinker import Namespace

quiz_signals = Namespace()

# Fired after an attempt has been recorded on a question
# Payload: question_id, correct, score, attempts, duration_seconds
answer_submitted = quiz_signals.signal('answer_submitted')

# Fired after the bulk editor replaced the whole collection
# Payload: count
collection_replaced = quiz_signals.signal('collection_replaced')

# Fired when writing the storage blob failed; the in-memory state is kept
# Payload: key, error
persistence_failed = quiz_signals.signal('persistence_failed')
