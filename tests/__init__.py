"""Tests for the Rachio Smart Hose Timer integration."""
