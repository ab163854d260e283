"""
Music bingo core Python package.

Pure-logic helpers shared by the host, TV and player surfaces, plus the thin
REST store client and the snapshot poller they use to stay in sync.
Modules:
- labels.py: song label normalization
- card.py: Card, Cell, generate_card
- state.py: GameSnapshot
- played.py: played-set resolution
- patterns.py: win patterns and evaluate_win
- session.py: PlayerSession (marks + bingo latch)
- store.py, poller.py: shared game row access
"""
