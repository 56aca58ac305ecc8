"""Pieces shared by the reviews and favorites apps.

`subjects` holds the tagged reference to a canteen or a menu item,
`exceptions` the error kinds the services raise, and `responses` how the
API views turn those errors into HTTP answers.
"""
