"""Describes the recipe browser domain. Centres around the `AggregateFetcher`.

What is there to it?

- Recipes live behind TheMealDB, a public json api. We only ever read.
- Most views need several recipes at once, so requests fan out and are joined
  as a batch. Either the whole batch succeeds or the view shows an error,
  except favorites, where a recipe that vanished upstream is just skipped.
- The only state that outlives a view is the favorites list (and the theme),
  kept in a small key-value store.

The upstream api and the storage are both behind protocols so they can be faked.
"""
