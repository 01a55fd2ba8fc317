"""
Clickstream export example.

Simulates a short viewing session and writes the event log as CSV.
"""

from sessiontrace import EventType, ViewingSession

def main():
    session = ViewingSession()
    session.register("demo-user")

    session.log_event(EventType.PLAY, {"time": 0.0})
    session.log_event(EventType.SPEED_CHANGE, {"rate": 1.5})
    bookmark = session.add_bookmark(42.0)
    session.jump_to_bookmark(bookmark.id)
    session.log_event(EventType.QUIZ_ANSWER_SELECTED, {"questionId": 1, "optionIndex": 1})
    session.finish()

    print(session.export_csv())
    path = session.exporter.save(session.log.snapshot(), output_dir="/tmp/sessiontrace")
    print(f"\nSaved to: {path}")

if __name__ == "__main__":
    main()
