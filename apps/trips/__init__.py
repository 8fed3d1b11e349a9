"""Trips app package.

Fishing charter trips are the catalogue the rest of the platform books
and reviews. The app owns trip search (location, capacity, price, boat
and fishing type, duration, date availability), featured trips and the
filter options shown by the search sidebar.
"""
