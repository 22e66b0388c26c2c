"""
dealerdesk reporting

Kept import-light: entity descriptors import `reporting.utils`, so this
package must not import the workspace or the entities at load time.
"""
