# -*- coding: utf-8 -*-
"""Food diary: REST backend (auth + dated meal records) and its client.

The server side lives in `food_diary.api` / `food_diary.auth` / `food_diary.records`;
`food_diary.client` holds the HTTP wrapper, auth state and calendar view logic.
"""
