"""Unit tests for Newshound core reporting logic."""
