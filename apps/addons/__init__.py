"""Add-ons app package: extras (gear rental, transfers, meals) sold with bookings."""
