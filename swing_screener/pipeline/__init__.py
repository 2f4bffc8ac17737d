"""Screening run orchestration: fetch snapshots, score, rank."""
